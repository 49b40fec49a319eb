"""
Pytest configuration and shared fixtures for test suite.
"""

import pytest
import tempfile
import shutil
from pathlib import Path
from PIL import Image


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    tmpdir = tempfile.mkdtemp()
    yield Path(tmpdir)
    shutil.rmtree(tmpdir, ignore_errors=True)


@pytest.fixture
def image_dir(temp_dir):
    """
    Directory to hold source images.

    Nested inside temp_dir so the sibling '<dir>_scaled' cache directory is
    cleaned up together with it.
    """
    path = temp_dir / "photos"
    path.mkdir()
    return path


def make_image(path, size=(100, 100), color='red'):
    """Save a solid-color RGB image and return its path as a string."""
    img = Image.new('RGB', size, color=color)
    img.save(path)
    return str(path)


def make_gradient(path, size=(120, 80)):
    """Save a horizontal gradient image and return its path as a string."""
    img = Image.new('RGB', size)
    width, height = size
    img.putdata([
        (x * 255 // max(1, width - 1), y * 255 // max(1, height - 1), 128)
        for y in range(height)
        for x in range(width)
    ])
    img.save(path)
    return str(path)


@pytest.fixture
def sample_images(image_dir):
    """
    Create a set of sample images for testing.

    Returns:
        dict with paths to:
        - red1.png, red2.png (identical content)
        - red_large.png (same content, higher resolution)
        - blue.png (unique image)
        - gradient.png (unique, non-square image)
        - notes.txt (not an image)
    """
    images = {
        'red1': make_image(image_dir / "red1.png"),
        'red2': make_image(image_dir / "red2.png"),
        'red_large': make_image(image_dir / "red_large.png", size=(200, 200)),
        'blue': make_image(image_dir / "blue.png", color='blue'),
        'gradient': make_gradient(image_dir / "gradient.png"),
    }

    notes = image_dir / "notes.txt"
    notes.write_text("not an image")
    images['notes'] = str(notes)

    return images


@pytest.fixture
def fingerprint_factory():
    """Build Fingerprint objects directly from pixel bytes."""
    from dupimg.models import Fingerprint

    def factory(pixels=None, scaled_width=1, scaled_height=1,
                source_width=100, source_height=100):
        if pixels is None:
            pixels = bytes(4 * scaled_height)
        return Fingerprint(
            source_width=source_width,
            source_height=source_height,
            scaled_width=scaled_width,
            scaled_height=scaled_height,
            pixels=bytes(pixels),
        )

    return factory


@pytest.fixture(autouse=True)
def isolated_user_config(monkeypatch, tmp_path):
    """Point the user configuration at an empty directory for every test."""
    from dupimg.user_config import get_user_config

    for var in ('DUPIMG_THRESHOLD', 'DUPIMG_WORKERS', 'DUPIMG_PROGRESS_INTERVAL',
                'DUPIMG_SKIP_ERRORS', 'DUPIMG_USE_CACHE'):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setenv('DUPIMG_CONFIG_DIR', str(tmp_path / "config"))

    config = get_user_config()
    config.reload()
    yield config
    config.reload()
