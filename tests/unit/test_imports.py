"""
Import validation tests.

These tests ensure all modules can be imported successfully, catching
issues like missing dependencies or circular imports BEFORE deployment.

Run with: pytest tests/unit/test_imports.py -v
"""

import importlib
import sys
from pathlib import Path

import pytest


# Add src to path to simulate Lambda environment
SRC_PATH = Path(__file__).parent.parent.parent / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))


class TestHandlerImports:
    """Verify all handler modules can be imported without errors."""

    @pytest.mark.parametrize("module_name", [
        "handlers.main",
        "handlers.health_check",
        "handlers.dashboard",
        "handlers.change_stream",
    ])
    def test_handler_import(self, module_name: str):
        """Each Lambda entrypoint module should import without errors."""
        try:
            module = importlib.import_module(module_name)
            assert hasattr(module, "lambda_handler"), f"{module_name} missing lambda_handler"
        except ImportError as e:
            pytest.fail(f"Failed to import {module_name}: {e}")

    @pytest.mark.parametrize("module_name", [
        "handlers.common",
        "handlers.tables",
        "handlers.details",
    ])
    def test_route_module_import(self, module_name: str):
        """Route modules without a lambda_handler should still import."""
        try:
            importlib.import_module(module_name)
        except ImportError as e:
            pytest.fail(f"Failed to import {module_name}: {e}")


class TestServiceImports:
    """Verify all service modules can be imported."""

    @pytest.mark.parametrize("module_name", [
        "services.filter_state",
        "services.predicate_service",
        "services.query_composer",
        "services.enrichment_service",
        "services.stats_service",
        "services.change_service",
        "services.table_service",
        "services.session_service",
        "services.dashboard_service",
    ])
    def test_service_import(self, module_name: str):
        """Each service module should import without errors."""
        try:
            importlib.import_module(module_name)
        except ImportError as e:
            pytest.fail(f"Failed to import {module_name}: {e}")


class TestRepositoryImports:
    """Verify the data sources import, including the SQLAlchemy backend."""

    @pytest.mark.parametrize("module_name", [
        "repositories.base",
        "repositories.memory_repo",
        "repositories.postgres_repo",
        "repositories.sample_data",
    ])
    def test_repository_import(self, module_name: str):
        try:
            importlib.import_module(module_name)
        except ImportError as e:
            pytest.fail(f"Failed to import {module_name}: {e}")


class TestModelImports:
    """Verify all model modules can be imported."""

    @pytest.mark.parametrize("module_name", [
        "models.change",
        "models.conversation",
        "models.customer",
        "models.enums",
        "models.filters",
        "models.insight",
        "models.query",
        "models.response",
        "models.stats",
    ])
    def test_model_import(self, module_name: str):
        """Each model module should import without errors."""
        try:
            importlib.import_module(module_name)
        except ImportError as e:
            pytest.fail(f"Failed to import {module_name}: {e}")


class TestUtilImports:
    """Verify all utility modules can be imported."""

    @pytest.mark.parametrize("module_name", [
        "utils.logging_config",
        "utils.cache_service",
        "utils.error_handling",
        "utils.validators",
    ])
    def test_util_import(self, module_name: str):
        """Each utility module should import without errors."""
        try:
            importlib.import_module(module_name)
        except ImportError as e:
            pytest.fail(f"Failed to import {module_name}: {e}")


class TestNoSrcPrefix:
    """Ensure no modules use 'from src.' imports (breaks in Lambda)."""

    @pytest.mark.parametrize("package", ["handlers", "services", "repositories", "models", "utils"])
    def test_no_src_prefix(self, package: str):
        """Source files should not have 'from src.' imports."""
        for py_file in (SRC_PATH / package).glob("*.py"):
            content = py_file.read_text()
            assert "from src." not in content, f"{py_file.name} contains 'from src.' import"
            assert "import src." not in content, f"{py_file.name} contains 'import src.' import"
