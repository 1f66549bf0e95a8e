"""svk-registry: read-only query layer over SVK artifacts.

Import from submodules:
- version: __version__
- queries: parse_query, dispatch and the request types
- context: RegistryContext, create_context
"""

from svk_registry.version import __version__ as __version__
