"""Import tests for every package module.

Taichi is initialized by the session fixture, so modules that allocate
fields can be imported here too.
"""

import importlib
import pkgutil

import pytest

import software_graphics

MODULE_NAMES = sorted(
    info.name
    for info in pkgutil.walk_packages(software_graphics.__path__, prefix="software_graphics.")
)


class TestPackageImports:
    """Tests that every module, including those defining Taichi functions, imports."""

    @pytest.mark.parametrize("name", MODULE_NAMES)
    def test_module_imports(self, name):
        """Test the module imports without errors."""
        assert importlib.import_module(name) is not None

    def test_device_color_helpers_defined(self):
        """Test the u8 helpers are decorated Taichi functions importable from color."""
        from software_graphics.core import color

        for helper in ("shade_u8", "scale_u8", "add_u8", "blend_u8"):
            assert callable(getattr(color, helper))

    def test_color_annotations_resolve(self):
        """Test host color annotations resolve to real types."""
        import typing

        from software_graphics.core.color import Color8, ColorF

        hints = typing.get_type_hints(Color8.__add__)
        assert hints["other"] is Color8
        assert typing.get_type_hints(ColorF.zero)["return"] is ColorF
