"""Root conftest.py for test configuration.

Ensures local src/ directory takes priority over any installed packages, and
provides rendezvous-file fixtures rooted in a temporary directory.
"""

import json
import sys
from collections.abc import Callable
from pathlib import Path

import pytest

# Insert local src directory at the beginning of sys.path
# This ensures that the local buildless package is used, not any installed one
_src_dir = Path(__file__).parent.parent / "src"
if str(_src_dir) not in sys.path:
    sys.path.insert(0, str(_src_dir))

# Force reimport of buildless modules if already imported
for module_name in list(sys.modules.keys()):
    if module_name.startswith("buildless"):
        del sys.modules[module_name]

from buildless.config.constants import AgentPaths, WellKnown  # noqa: E402


@pytest.fixture
def constants(tmp_path: Path) -> WellKnown:
    """Well-known table whose rendezvous files live under tmp_path."""
    agent_dir = tmp_path / "buildless"
    paths = AgentPaths(
        instance=agent_dir / "buildless-service.id",
        config=agent_dir / "buildless-agent.json",
    )
    return WellKnown(agent_paths_unix=paths, agent_paths_windows=paths)


@pytest.fixture
def install_agent(constants: WellKnown) -> Callable[..., AgentPaths]:
    """Write agent rendezvous files; returns their paths."""

    def _install(
        port: int = 42011,
        pid: int = 4242,
        *,
        raw: str | None = None,
        instance: bool = True,
        config: bool = True,
    ) -> AgentPaths:
        paths = constants.agent_paths_unix
        paths.config.parent.mkdir(parents=True, exist_ok=True)
        if instance:
            paths.instance.write_text("buildless-service-1")
        if config:
            body = raw
            if body is None:
                body = json.dumps({"pid": pid, "port": port, "control": {"port": 42010}})
            paths.config.write_text(body)
        return paths

    return _install
