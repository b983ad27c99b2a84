"""
Test suite for the pure geometry helpers.

Tests cover:
- Perihelion distance on and off the major axis
- Aphelion / eccentricity / semi-minor axis chain
- Orientation angle, including degenerate triangles
- Step rules
- Rotate + translate transform
"""

import pytest
import numpy as np
from elliptica import geometry


SQRT_075 = np.sqrt(0.75)


class TestPerihelion:
    """Distance from the focus to the starting point."""

    def test_on_major_axis_uses_abs_x(self):
        assert geometry.perihelion(7.0, 0.0) == 7.0
        assert geometry.perihelion(-7.0, 0.0) == 7.0

    def test_off_axis_uses_euclidean_distance(self):
        assert geometry.perihelion(3.0, 4.0) == 5.0
        assert geometry.perihelion(-3.0, -4.0) == 5.0
        assert geometry.perihelion(0.0, -5.0) == 5.0

    def test_origin(self):
        assert geometry.perihelion(0.0, 0.0) == 0.0

    def test_nan_propagates(self):
        assert np.isnan(geometry.perihelion(np.nan, 1.0))


class TestAxisDerivation:
    """Aphelion, eccentricity and semi-minor axis."""

    def test_aphelion_complements_perihelion(self):
        assert geometry.aphelion(5.0, 10.0) == 15.0

    def test_eccentricity(self):
        assert geometry.eccentricity(5.0, 15.0) == 0.5

    def test_circle_has_zero_eccentricity(self):
        assert geometry.eccentricity(4.0, 4.0) == 0.0

    def test_semi_minor_axis(self):
        assert geometry.semi_minor_axis(10.0, 0.5) == pytest.approx(8.660254, abs=1e-6)

    def test_semi_minor_axis_of_circle(self):
        assert geometry.semi_minor_axis(10.0, 0.0) == 10.0

    @pytest.mark.parametrize("perihelion,a", [
        (0.1, 10.0), (5.0, 10.0), (9.99, 10.0), (1.0, 1.5), (123.0, 1000.0)
    ])
    def test_chain_invariants(self, perihelion, a):
        """0 <= e < 1, b <= a and r_p + r_a = 2a for any r_p < a."""
        r_a = geometry.aphelion(perihelion, a)
        e = geometry.eccentricity(perihelion, r_a)
        b = geometry.semi_minor_axis(a, e)
        assert 0.0 <= e < 1.0
        assert 0.0 < b <= a
        assert r_a + perihelion == pytest.approx(2 * a, rel=1e-12)


class TestOrientationAngle:
    """Law of cosines on the |x|, |y| right triangle."""

    def test_three_four_five(self):
        assert geometry.orientation_angle(3.0, 4.0) == pytest.approx(
            np.arccos(0.8), abs=1e-12)
        assert geometry.orientation_angle(3.0, 4.0) == pytest.approx(0.643501, abs=1e-6)

    def test_sign_of_offsets_ignored(self):
        assert geometry.orientation_angle(-3.0, 4.0) == geometry.orientation_angle(3.0, 4.0)
        assert geometry.orientation_angle(3.0, -4.0) == geometry.orientation_angle(3.0, 4.0)

    def test_on_minor_side_is_zero(self):
        """Zero adjacent side gives acos(1) = 0."""
        assert geometry.orientation_angle(0.0, 5.0) == 0.0

    @pytest.mark.parametrize("x,y", [(0.0, 0.0), (5.0, 0.0), (-2.0, 0.0)])
    def test_degenerate_triangle_is_nan(self, x, y):
        assert np.isnan(geometry.orientation_angle(x, y))
        assert geometry.is_degenerate_triangle(x, y)

    def test_proper_triangle_not_degenerate(self):
        assert not geometry.is_degenerate_triangle(3.0, 4.0)
        assert not geometry.is_degenerate_triangle(0.0, 4.0)

    def test_range(self):
        rng = np.random.default_rng(7)
        for x, y in rng.uniform(-50, 50, size=(200, 2)):
            angle = geometry.orientation_angle(x, y)
            assert 0.0 <= angle <= np.pi / 2

    def test_tiny_x_stays_finite(self):
        """Rounding near cos = 1 is clipped rather than producing NaN."""
        assert np.isfinite(geometry.orientation_angle(1e-9, 3.0))


class TestPurity:
    """Repeated derivations are bit-identical."""

    def test_repeat_calls_identical(self):
        for _ in range(3):
            first = (geometry.perihelion(3.3, 4.7),
                     geometry.orientation_angle(3.3, 4.7))
            second = (geometry.perihelion(3.3, 4.7),
                      geometry.orientation_angle(3.3, 4.7))
            assert first == second
        r_p = geometry.perihelion(3.3, 4.7)
        r_a = geometry.aphelion(r_p, 12.0)
        e1 = geometry.eccentricity(r_p, r_a)
        e2 = geometry.eccentricity(r_p, r_a)
        assert e1 == e2
        assert geometry.semi_minor_axis(12.0, e1) == geometry.semi_minor_axis(12.0, e2)


class TestStepRules:
    """Canonical-frame y for each step rule."""

    def test_reference_formula_reproduced(self):
        b = 10.0 * SQRT_075
        y = geometry.reference_step_y(10.01, 10.0, b)
        assert y == pytest.approx((b * (10.0**2 - 10.01**2)) / 10.0, rel=1e-14)
        assert y == pytest.approx(-0.17331, abs=1e-4)

    def test_reference_has_no_square_root(self):
        """At x = 0 the reference rule gives b*a, not b."""
        assert geometry.reference_step_y(0.0, 10.0, 5.0) == 50.0

    def test_ellipse_formula(self):
        assert geometry.ellipse_step_y(0.0, 10.0, 5.0) == 5.0
        assert geometry.ellipse_step_y(10.0, 10.0, 5.0) == 0.0
        assert np.isnan(geometry.ellipse_step_y(10.01, 10.0, 5.0))

    def test_ellipse_step_starts_on_upper_half(self):
        x, y, direction = geometry.ellipse_step(10.0, -1, 1.0, 10.0, 5.0)
        assert x == 9.0
        assert y > 0
        assert direction == -1

    def test_ellipse_step_reverses_at_vertex(self):
        x, y, direction = geometry.ellipse_step(-9.5, -1, 1.0, 10.0, 5.0)
        assert x == pytest.approx(-9.5)
        assert y < 0
        assert direction == 1

    def test_ellipse_step_stays_on_ellipse(self):
        x, direction = 10.0, -1
        for _ in range(500):
            x, y, direction = geometry.ellipse_step(x, direction, 0.37, 10.0, 5.0)
            assert -10.0 <= x <= 10.0
            assert (x / 10.0)**2 + (y / 5.0)**2 == pytest.approx(1.0, abs=1e-12)


class TestRotateTranslate:
    """Canonical frame to caller frame."""

    def test_identity(self):
        out = geometry.rotate_translate((2.0, 3.0), 0.0, (0.0, 0.0))
        np.testing.assert_allclose(out, [2.0, 3.0])

    def test_quarter_turn_counter_clockwise(self):
        out = geometry.rotate_translate((1.0, 0.0), np.pi / 2, (0.0, 0.0))
        np.testing.assert_allclose(out, [0.0, 1.0], atol=1e-15)

    def test_translation_after_rotation(self):
        out = geometry.rotate_translate((1.0, 0.0), np.pi, (5.0, -2.0))
        np.testing.assert_allclose(out, [4.0, -2.0], atol=1e-15)

    def test_batch(self):
        pts = np.array([[1.0, 0.0], [0.0, 1.0], [2.0, 2.0]])
        out = geometry.rotate_translate(pts, 0.3, (1.0, 1.0))
        assert out.shape == (3, 2)
        for p, o in zip(pts, out):
            np.testing.assert_allclose(o, geometry.rotate_translate(p, 0.3, (1.0, 1.0)))

    def test_rotation_preserves_length(self):
        R = geometry.rotation_matrix(1.234)
        np.testing.assert_allclose(R @ R.T, np.eye(2), atol=1e-15)
