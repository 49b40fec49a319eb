"""
Unit tests for image scaling.
"""

import pytest
from PIL import Image

from dupimg.exceptions import DecodeError
from dupimg.scanner import compute_scaled_size, scale_image
from dupimg.scanner.scaling import row_stride
from conftest import make_image, make_gradient


class TestComputeScaledSize:
    """Test compute_scaled_size function."""

    def test_square(self):
        assert compute_scaled_size(128, 128) == (64, 64)

    def test_landscape(self):
        assert compute_scaled_size(128, 64) == (64, 32)

    def test_portrait(self):
        assert compute_scaled_size(64, 128) == (32, 64)

    def test_rounds_shorter_side(self):
        # 64 / 1.5 = 42.67
        assert compute_scaled_size(150, 100) == (64, 43)
        assert compute_scaled_size(100, 150) == (43, 64)

    def test_small_images_are_upscaled(self):
        assert compute_scaled_size(10, 5) == (64, 32)

    def test_zero_dimension(self):
        with pytest.raises(ValueError):
            compute_scaled_size(100, 0)


class TestRowStride:
    """Test row_stride function."""

    def test_aligned_width(self):
        assert row_stride(64) == 192

    def test_padded_width(self):
        # 43 * 3 = 129 -> padded to 132
        assert row_stride(43) == 132


class TestScaleImage:
    """Test scale_image function."""

    def test_square_image(self, temp_dir):
        path = make_image(temp_dir / "square.png", size=(128, 128))
        fp = scale_image(path)

        assert fp.scaled_size == (64, 64)
        assert fp.source_size == (128, 128)
        assert len(fp.pixels) == 64 * 64 * 3

    def test_landscape_image(self, temp_dir):
        path = make_image(temp_dir / "wide.png", size=(128, 64))
        fp = scale_image(path)
        assert fp.scaled_size == (64, 32)

    def test_portrait_image(self, temp_dir):
        path = make_image(temp_dir / "tall.png", size=(64, 128))
        fp = scale_image(path)
        assert fp.scaled_size == (32, 64)

    def test_padded_rows(self, temp_dir):
        path = make_gradient(temp_dir / "tall.png", size=(100, 150))
        fp = scale_image(path)

        assert fp.scaled_size == (43, 64)
        assert fp.stride == 132
        assert len(fp.pixels) == fp.stride * fp.scaled_height
        # Padding bytes are zero
        for row in range(fp.scaled_height):
            start = row * fp.stride
            assert fp.pixels[start + 129:start + 132] == b"\x00\x00\x00"

    def test_pixel_values_are_rgb(self, temp_dir):
        path = make_image(temp_dir / "red.png", size=(64, 64), color=(255, 0, 0))
        fp = scale_image(path)
        assert fp.pixels[:3] == bytes([255, 0, 0])

    def test_transparent_image_does_not_crash(self, temp_dir):
        path = temp_dir / "alpha.png"
        Image.new('RGBA', (80, 40), color=(0, 255, 0, 0)).save(path)
        fp = scale_image(path)
        assert fp.scaled_size == (64, 32)

    def test_palette_image(self, temp_dir):
        path = temp_dir / "palette.gif"
        Image.new('P', (32, 32)).save(path)
        fp = scale_image(path)
        assert fp.scaled_size == (64, 64)

    def test_grayscale_jpeg(self, temp_dir):
        path = temp_dir / "gray.jpg"
        Image.new('L', (90, 60), color=128).save(path)
        fp = scale_image(path)
        assert fp.scaled_size == (64, 43)

    def test_not_an_image(self, temp_dir):
        path = temp_dir / "fake.png"
        path.write_text("not an image")
        with pytest.raises(DecodeError):
            scale_image(path)

    def test_decode_error_is_ioerror(self, temp_dir):
        path = temp_dir / "fake.jpg"
        path.write_bytes(b"\xff\xd8garbage")
        with pytest.raises(IOError):
            scale_image(path)

    def test_missing_file(self, temp_dir):
        with pytest.raises(DecodeError):
            scale_image(temp_dir / "missing.png")

    def test_too_narrow_image(self, temp_dir):
        # 64 / 200 rounds to a zero-pixel height
        path = make_image(temp_dir / "line.png", size=(200, 1))
        with pytest.raises(DecodeError):
            scale_image(path)

    def test_deterministic(self, temp_dir):
        path = make_gradient(temp_dir / "gradient.png")
        assert scale_image(path) == scale_image(path)
