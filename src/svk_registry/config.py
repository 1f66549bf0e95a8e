"""Registry configuration from environment variables."""

import os
from dataclasses import dataclass, replace
from pathlib import Path

_TRUTHY = ("1", "true", "yes")


@dataclass(frozen=True)
class RegistryConfig:
    """Locations and flags the registry runs with.

    Attributes:
        project_dir: Project root holding producer state and generated artifacts
        repo_dir: Root that knowledge source base paths are relative to
        debug: Enable debug logging on stderr
    """

    project_dir: Path
    repo_dir: Path
    debug: bool

    @staticmethod
    def from_env() -> "RegistryConfig":
        """Load configuration from environment variables.

        SVK_PROJECT_DIR defaults to the current directory and SVK_REPO_DIR to
        the project directory.
        """
        project_dir = Path(os.environ.get("SVK_PROJECT_DIR", ".")).expanduser().absolute()
        repo_env = os.environ.get("SVK_REPO_DIR")
        repo_dir = Path(repo_env).expanduser().absolute() if repo_env else project_dir
        return RegistryConfig(
            project_dir=project_dir,
            repo_dir=repo_dir,
            debug=os.environ.get("SVK_DEBUG", "false").lower() in _TRUTHY,
        )

    def with_overrides(
        self,
        *,
        project_dir: Path | None = None,
        repo_dir: Path | None = None,
        debug: bool | None = None,
    ) -> "RegistryConfig":
        """Return new config with CLI-supplied values taking precedence."""
        return replace(
            self,
            project_dir=project_dir.absolute() if project_dir is not None else self.project_dir,
            repo_dir=repo_dir.absolute() if repo_dir is not None else self.repo_dir,
            debug=self.debug or bool(debug),
        )
