"""Query context with dependency injection.

RegistryContext holds everything a query needs: where the project and the
knowledge sources live, the immutable source registry, and the clock. It is
created once at the entry point and passed into every dispatch.
"""

from dataclasses import dataclass
from pathlib import Path

from svk_registry.config import RegistryConfig
from svk_registry.integrations.time.abc import Time
from svk_registry.io.sandbox import SandboxedRoot
from svk_registry.registry import SourceRegistry


@dataclass(frozen=True)
class RegistryContext:
    """Immutable context holding all dependencies for query handling.

    Attributes:
        project_dir: Project root (producer state, .docs, .audit, ...)
        repo_dir: Root that knowledge source base paths resolve against
        registry: Declared knowledge sources
        time: Clock used by staleness rules
    """

    project_dir: Path
    repo_dir: Path
    registry: SourceRegistry
    time: Time

    @property
    def project(self) -> SandboxedRoot:
        """Sandbox over the project root; all project-side reads use it."""
        return SandboxedRoot(self.project_dir)

    @staticmethod
    def for_test(
        project_dir: Path | None = None,
        repo_dir: Path | None = None,
        registry: SourceRegistry | None = None,
        time: Time | None = None,
    ) -> "RegistryContext":
        """Create test context with sensible defaults.

        Args:
            project_dir: Project root (defaults to Path("/fake/project"))
            repo_dir: Knowledge root (defaults to project_dir)
            registry: Source registry (defaults to an empty registry)
            time: Clock (defaults to FakeTime)

        Example:
            >>> ctx = RegistryContext.for_test(project_dir=tmp_path)
        """
        from svk_registry.integrations.time.fake import FakeTime

        resolved_project_dir = project_dir if project_dir is not None else Path("/fake/project")
        return RegistryContext(
            project_dir=resolved_project_dir,
            repo_dir=repo_dir if repo_dir is not None else resolved_project_dir,
            registry=registry if registry is not None else SourceRegistry(sources=()),
            time=time if time is not None else FakeTime(),
        )


def create_context(config: RegistryConfig) -> RegistryContext:
    """Create production context from configuration.

    Loads the bundled source declarations once; the registry is never
    reloaded for the lifetime of the context.
    """
    from svk_registry.integrations.time.real import RealTime

    return RegistryContext(
        project_dir=config.project_dir,
        repo_dir=config.repo_dir,
        registry=SourceRegistry.bundled(),
        time=RealTime(),
    )
