"""solcpack: Cloud Native Buildpack that contributes the Solidity compiler.

Build phase:
  - Resolves the Node engine dependency declared in buildpack.toml
  - Reuses the cached layer when the dependency descriptor is unchanged
  - Otherwise expands Node, installs ``solc`` with npm, records a Syft SBOM
    with the version reported by ``solcjs --version`` and persists layer
    metadata last
  - Contributes a default ``web`` process when BP_ENABLE_SOLC_PROCESS=true
"""

__version__ = "0.1.0"
__description__ = "Cloud Native Buildpack for the Solidity compiler (solcjs)"

from solcpack.build import Build, BuildContext, BuildResult
from solcpack.detect import Detect, DetectResult
from solcpack.solc import Solc
from solcpack.cli.app import app as cli

__all__ = [
    "Build",
    "BuildContext",
    "BuildResult",
    "Detect",
    "DetectResult",
    "Solc",
    "cli",
    "__version__",
]
