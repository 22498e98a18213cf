"""
Structure lint tests.
Verify that every component follows the component skeleton.
"""

from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).parent.parent
PACKAGE = PROJECT_ROOT / "logic_looper"

COMPONENTS = ["puzzle", "progress", "play", "sync"]


class TestProjectStructure:
    def test_core_directories_exist(self) -> None:
        for name in ("components", "ports", "adapters", "rules", "app_shell"):
            assert (PACKAGE / name).is_dir(), name

    def test_tests_structure_exists(self) -> None:
        assert (PROJECT_ROOT / "tests" / "unit").is_dir()
        assert (PROJECT_ROOT / "tests" / "integration").is_dir()
        assert (PROJECT_ROOT / "tests" / "regression").is_dir()

    def test_rules_file_exists(self) -> None:
        assert (PROJECT_ROOT / "rules.yaml").is_file()

    @pytest.mark.parametrize("component", COMPONENTS)
    def test_component_skeleton(self, component: str) -> None:
        base = PACKAGE / "components" / component
        for filename in ("__init__.py", "component.py", "models.py", "ports.py"):
            assert (base / filename).is_file(), f"{component}/{filename}"
        assert (base / "tests" / "test_unit.py").is_file()

    @pytest.mark.parametrize("component", COMPONENTS)
    def test_component_core_has_no_adapter_imports(self, component: str) -> None:
        source = (PACKAGE / "components" / component / "component.py").read_text()
        assert "logic_looper.adapters" not in source
        assert "import httpx" not in source
