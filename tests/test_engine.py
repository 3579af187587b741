"""Tests for colorswitch.core.engine — RGBA8 colour transforms."""

import numpy as np
import pytest
from colorswitch.core import engine
from colorswitch.core.engine import (
    CENTER_HUE,
    BufferShapeError,
    apply_hue_stretch,
    apply_identity,
    apply_rotate_saturate,
    stretch_hue,
    transform,
)
from colorswitch.core.hsl import rgb_to_hsl
from colorswitch.core.types import TransformMode

TRANSFORMS = [apply_rotate_saturate, apply_hue_stretch]


def _pixels(*rgba: tuple[int, int, int, int]) -> bytes:
    return bytes(v for px in rgba for v in px)


def _random_buffer(n_pixels: int, seed: int = 42) -> bytes:
    return np.random.default_rng(seed).integers(0, 256, size=n_pixels * 4, dtype=np.uint8).tobytes()


def _hue_sat(rgb: bytes) -> tuple[float, float]:
    h, s, _l = rgb_to_hsl(np.frombuffer(rgb, dtype=np.uint8)[:3].astype(np.float64).reshape(1, 3) / 255.0)
    return float(h[0]), float(s[0])


class TestShapePreservation:
    @pytest.mark.parametrize('fn', TRANSFORMS)
    def test_same_length(self, fn):
        buf = _random_buffer(7 * 5)
        assert len(fn(buf)) == len(buf)

    @pytest.mark.parametrize('fn', TRANSFORMS)
    def test_alpha_untouched(self, fn):
        buf = _random_buffer(1000)
        out = fn(buf)
        assert out[3::4] == buf[3::4]

    @pytest.mark.parametrize('fn', TRANSFORMS)
    def test_empty_buffer(self, fn):
        assert fn(b'') == b''

    def test_input_not_mutated(self):
        buf = bytearray(_pixels((255, 0, 0, 255)))
        apply_rotate_saturate(buf)
        assert bytes(buf) == _pixels((255, 0, 0, 255))

    def test_array_in_array_out(self):
        arr = np.random.default_rng(1).integers(0, 256, size=(3, 4, 4), dtype=np.uint8)
        out = apply_hue_stretch(arr)
        assert isinstance(out, np.ndarray)
        assert out.shape == arr.shape
        assert out.dtype == np.uint8
        np.testing.assert_array_equal(out[..., 3], arr[..., 3])

    def test_array_and_bytes_agree(self):
        buf = _random_buffer(64)
        arr = np.frombuffer(buf, dtype=np.uint8).copy()
        assert apply_rotate_saturate(arr).tobytes() == apply_rotate_saturate(buf)


class TestIdentity:
    def test_byte_for_byte(self):
        buf = _random_buffer(333)
        assert apply_identity(buf) == buf

    def test_returns_copy_for_arrays(self):
        arr = np.zeros(8, dtype=np.uint8)
        out = apply_identity(arr)
        out[0] = 1
        assert arr[0] == 0

    def test_via_transform(self):
        buf = _random_buffer(10)
        assert transform(buf, TransformMode.IDENTITY, width=5, height=2) == buf


class TestGreyInvariance:
    @pytest.mark.parametrize('fn', TRANSFORMS)
    def test_every_grey_level(self, fn):
        buf = _pixels(*[(v, v, v, 200) for v in range(256)])
        assert fn(buf) == buf

    @pytest.mark.parametrize('fn', TRANSFORMS)
    @pytest.mark.parametrize('clamp', [True, False])
    def test_black_and_white(self, fn, clamp):
        buf = _pixels((0, 0, 0, 255), (255, 255, 255, 0), (0, 0, 0, 17))
        assert fn(buf, clamp_saturation=clamp) == buf


class TestRotateSaturate:
    def test_red_green_scenario(self):
        buf = _pixels((255, 0, 0, 255), (0, 255, 0, 255))
        out = apply_rotate_saturate(buf)
        # red (0 deg) -> cyan (180), green (120) -> magenta (300)
        assert out == _pixels((0, 255, 255, 255), (255, 0, 255, 255))

    def test_red_green_scenario_with_dimensions(self):
        buf = _pixels((255, 0, 0, 255), (0, 255, 0, 255))
        out = transform(buf, TransformMode.ROTATE_SATURATE, width=2, height=1)
        assert out == _pixels((0, 255, 255, 255), (255, 0, 255, 255))

    def test_hue_wraps_past_360(self):
        # blue-violet at 270 deg rotates to 90 deg (yellow-green), not 450
        out = apply_rotate_saturate(_pixels((128, 0, 255, 255)))
        hue, _s = _hue_sat(out)
        assert hue == pytest.approx(90.0, abs=0.5)

    def test_saturation_boosted(self):
        out = apply_rotate_saturate(_pixels((150, 100, 100, 255)))
        # hue 0 -> 180, s 0.2 -> 0.8, l unchanged
        assert out == _pixels((25, 225, 225, 255))

    def test_rotating_twice_restores_hue_not_saturation(self):
        src = _pixels((150, 100, 100, 255))
        twice = apply_rotate_saturate(apply_rotate_saturate(src))
        src_hue, src_sat = _hue_sat(src)
        out_hue, out_sat = _hue_sat(twice)
        assert out_hue == pytest.approx(src_hue, abs=0.5)
        assert src_sat == pytest.approx(0.2)
        assert out_sat == pytest.approx(1.0)
        assert twice == _pixels((250, 0, 0, 255))

    def test_unclamped_matches_clamped_for_saturated_primaries(self):
        # Overshoot is clipped by the 8-bit cast
        buf = _pixels((255, 0, 0, 255), (0, 255, 0, 255))
        assert apply_rotate_saturate(buf, clamp_saturation=False) == apply_rotate_saturate(buf)

    def test_unclamped_differs_for_dark_colours(self):
        # s = 0.43 boosts past 1: clamped lands on (0, 140, 140), unclamped overshoots and clips
        buf = _pixels((100, 40, 40, 255))
        clamped = apply_rotate_saturate(buf)
        unclamped = apply_rotate_saturate(buf, clamp_saturation=False)
        assert clamped == _pixels((0, 140, 140, 255))
        assert clamped != unclamped
        assert unclamped[0] == 0


class TestHueStretch:
    def test_center_is_216_degrees(self):
        assert CENTER_HUE * 360.0 == pytest.approx(216.0)

    def test_reference_ray_is_fixed(self):
        assert float(stretch_hue(216.0)) == pytest.approx(216.0)

    def test_opposite_of_reference_is_fixed(self):
        assert float(stretch_hue(36.0)) == pytest.approx(36.0)

    def test_pushes_away_from_reference(self):
        # 90 deg from the reference: atan2(-1, -0.8) seen from the reference frame
        assert float(stretch_hue(126.0)) == pytest.approx(87.3402, abs=1e-3)
        assert float(stretch_hue(306.0)) == pytest.approx(344.6598, abs=1e-3)

    def test_result_in_range(self):
        hues = np.linspace(0.0, 360.0, 721)
        out = stretch_hue(hues)
        assert np.all(out >= 0.0)
        assert np.all(out < 360.0)

    def test_reference_pixel(self):
        # HSL(216, 0.5, 0.5) quantizes to (64, 115, 191): hue 215.906 deg,
        # stretched to 215.528 deg, saturation 2.0 clamped to 1.0
        src = _pixels((64, 115, 191, 255))
        out = apply_hue_stretch(src)
        hue, sat = _hue_sat(out)
        assert hue == pytest.approx(215.53, abs=0.2)
        assert sat == pytest.approx(1.0)
        assert out == _pixels((0, 104, 255, 255))

    def test_stretch_differs_from_rotate(self):
        buf = _pixels((200, 120, 40, 255))
        assert apply_hue_stretch(buf) != apply_rotate_saturate(buf)


class TestParallel:
    @pytest.mark.parametrize('mode', [TransformMode.ROTATE_SATURATE, TransformMode.HUE_STRETCH])
    @pytest.mark.parametrize('workers', [2, 3, 8])
    def test_matches_single_thread(self, mode, workers):
        buf = _random_buffer(1001)
        assert transform(buf, mode, max_workers=workers) == transform(buf, mode)

    def test_more_workers_than_pixels(self):
        buf = _pixels((255, 0, 0, 255), (0, 255, 0, 255))
        assert transform(buf, TransformMode.ROTATE_SATURATE, max_workers=16) == apply_rotate_saturate(buf)

    def test_zero_workers_rejected(self):
        with pytest.raises(ValueError, match='max_workers'):
            transform(b'\x00' * 4, TransformMode.ROTATE_SATURATE, max_workers=0)


class TestChunking:
    @pytest.fixture
    def small_chunks(self, monkeypatch: pytest.MonkeyPatch) -> list[int]:
        """Shrink CHUNK_PIXELS to 7 and record the size of every edited chunk."""
        sizes: list[int] = []
        real_edit = engine._edit_hsl

        def recording_edit(pixels, mode, clamp_saturation):
            sizes.append(len(pixels))
            return real_edit(pixels, mode, clamp_saturation)

        monkeypatch.setattr(engine, 'CHUNK_PIXELS', 7)
        monkeypatch.setattr(engine, '_edit_hsl', recording_edit)
        return sizes

    @pytest.mark.parametrize('mode', [TransformMode.ROTATE_SATURATE, TransformMode.HUE_STRETCH])
    @pytest.mark.parametrize('workers', [1, 4])
    def test_small_chunks_match_whole_buffer(self, mode, workers, monkeypatch):
        buf = _random_buffer(50)
        expected = transform(buf, mode)
        monkeypatch.setattr(engine, 'CHUNK_PIXELS', 7)
        assert transform(buf, mode, max_workers=workers) == expected

    def test_single_worker_edits_bounded_chunks(self, small_chunks):
        transform(_random_buffer(50), TransformMode.ROTATE_SATURATE)
        assert sum(small_chunks) == 50
        assert max(small_chunks) <= 7
        assert len(small_chunks) == 8

    def test_workers_edit_bounded_chunks(self, small_chunks):
        transform(_random_buffer(50), TransformMode.HUE_STRETCH, max_workers=3)
        assert sum(small_chunks) == 50
        assert max(small_chunks) <= 7

    def test_empty_buffer_edits_nothing(self, small_chunks):
        assert transform(b'', TransformMode.ROTATE_SATURATE) == b''
        assert small_chunks == []


class TestPreconditions:
    @pytest.mark.parametrize('fn', [apply_identity, apply_rotate_saturate, apply_hue_stretch])
    def test_length_not_multiple_of_4(self, fn):
        with pytest.raises(BufferShapeError, match='multiple of 4'):
            fn(b'\x00' * 7)

    def test_dimension_mismatch(self):
        with pytest.raises(BufferShapeError, match='does not match 2x2'):
            transform(b'\x00' * 12, TransformMode.ROTATE_SATURATE, width=2, height=2)

    def test_width_without_height(self):
        with pytest.raises(BufferShapeError):
            transform(b'\x00' * 8, TransformMode.IDENTITY, width=2)

    def test_non_uint8_array(self):
        with pytest.raises(BufferShapeError, match='uint8'):
            apply_rotate_saturate(np.zeros(8, dtype=np.float32))

    def test_is_value_error(self):
        assert issubclass(BufferShapeError, ValueError)

    def test_unknown_mode(self):
        with pytest.raises(ValueError, match='Unknown transform mode'):
            transform(b'\x00' * 4, 'rotate')
