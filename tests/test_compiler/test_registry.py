"""Tests for ShapeRegistry."""

from wpspawn.compiler.registry import ShapeRegistry, get_shape_registry
from wpspawn.compiler.shapes import JobShape, WebShape, WorkloadShape
from wpspawn.models.kube import Container


class DebugShape(WorkloadShape):
    """Shape used to test registration."""

    name = "debug"
    component = "debug"

    def main_container(self, site, command=()):
        return Container(name="debug", image="busybox", args=list(command))


class TestShapeRegistry:
    """Test ShapeRegistry."""

    def test_builtin_shapes(self):
        """Test that web and job are registered."""
        registry = ShapeRegistry()

        assert registry.list_shapes() == ["web", "job"]
        assert isinstance(registry.get_shape("web"), WebShape)
        assert isinstance(registry.get_shape("job"), JobShape)
        assert registry.get_shape("nonexistent") is None

    def test_register(self, site):
        """Test registering a custom shape."""
        registry = ShapeRegistry()
        registry.register(DebugShape())

        shape = registry.get_shape("debug")
        assert shape.main_container(site, ["sh"]).args == ["sh"]
        assert shape.restart_policy is None
        assert shape.pod_security_context() is None

    def test_default_registry_is_shared(self):
        """Test the process wide registry."""
        assert get_shape_registry() is get_shape_registry()
