"""
Unit tests for the IncludeDirective data model.
"""

import pytest

from glsl_include.include_directive import IncludeDirective


@pytest.mark.glsl_include
class TestIncludeDirectiveCreation:
    """Test IncludeDirective creation."""

    def test_create_angle_directive(self) -> None:
        """Test an angle bracket directive with defaults."""
        directive = IncludeDirective(name="common.glsl", delimiter="angle", line=3)

        assert directive.name == "common.glsl"
        assert directive.delimiter == "angle"
        assert directive.line == 3
        assert directive.is_pragma is False

    def test_create_pragma_directive(self) -> None:
        """Test a directive written as #pragma include."""
        directive = IncludeDirective(name="noise.glsl", delimiter="quote", line=1, is_pragma=True)

        assert directive.is_pragma is True

    def test_equality(self) -> None:
        """Test directives with the same fields are equal."""
        first = IncludeDirective(name="a.glsl", delimiter="angle", line=1)
        second = IncludeDirective(name="a.glsl", delimiter="angle", line=1)

        assert first == second


@pytest.mark.glsl_include
class TestIncludeDirectiveImmutability:
    """Test IncludeDirective immutability (frozen dataclass)."""

    def test_include_directive_is_immutable(self) -> None:
        """Test that fields cannot be reassigned."""
        directive = IncludeDirective(name="a.glsl", delimiter="angle", line=1)

        with pytest.raises(AttributeError):
            directive.name = "b.glsl"  # type: ignore[misc]

    def test_include_directive_is_hashable(self) -> None:
        """Test that IncludeDirective can be used in sets."""
        directive = IncludeDirective(name="a.glsl", delimiter="angle", line=1)
        duplicate = IncludeDirective(name="a.glsl", delimiter="angle", line=1)

        assert len({directive, duplicate}) == 1
