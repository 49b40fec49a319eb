"""
Unit tests for scanner module functions.
"""

import os
import pytest
from PIL import Image

from dupimg.exceptions import DecodeError, InvalidPathError, InsufficientImagesError
from dupimg.models import Match
from dupimg.scanner import (
    find_image_files,
    load_fingerprints_parallel,
    count_combinations,
    compare_all_pairs,
    compare_one_to_many,
    scan_directory,
    find_similar_images,
    scale_image,
)
from dupimg.cache import FingerprintCache
from conftest import make_image


class SpyScorer:
    """Scorer that records every pair it is asked about."""

    def __init__(self, value=0.0):
        self.value = value
        self.calls = []

    def __call__(self, a, b):
        self.calls.append((a, b))
        return self.value


class TestFindImageFiles:
    """Test find_image_files function."""

    def test_finds_only_images(self, sample_images, image_dir):
        """Text files are not picked up."""
        files = find_image_files(image_dir)
        assert len(files) == 5
        assert sample_images['notes'] not in files

    def test_sorted_order(self, image_dir):
        for name in ("c.png", "a.jpg", "b.gif"):
            make_image(image_dir / name)
        files = find_image_files(image_dir)
        assert [os.path.basename(f) for f in files] == ["a.jpg", "b.gif", "c.png"]

    def test_extensions_are_case_sensitive(self, image_dir):
        """Upper-case extensions are skipped."""
        make_image(image_dir / "lower.png")
        make_image(image_dir / "upper.PNG")
        make_image(image_dir / "mixed.Jpg")
        files = find_image_files(image_dir)
        assert [os.path.basename(f) for f in files] == ["lower.png"]

    def test_all_supported_extensions(self, image_dir):
        for ext in ("bmp", "png", "jpg", "jpeg", "gif", "tiff"):
            make_image(image_dir / f"img.{ext}")
        assert len(find_image_files(image_dir)) == 6

    def test_subdirectories_not_searched(self, image_dir):
        nested = image_dir / "nested"
        nested.mkdir()
        make_image(nested / "inner.png")
        assert find_image_files(image_dir) == []

    def test_empty_directory(self, image_dir):
        assert find_image_files(image_dir) == []

    def test_missing_directory(self, temp_dir):
        with pytest.raises(InvalidPathError):
            find_image_files(temp_dir / "missing")

    def test_file_instead_of_directory(self, image_dir):
        path = make_image(image_dir / "a.png")
        with pytest.raises(InvalidPathError):
            find_image_files(path)


class TestLoadFingerprintsParallel:
    """Test load_fingerprints_parallel function."""

    def test_results_in_input_order(self, sample_images):
        paths = [sample_images['gradient'], sample_images['red1'], sample_images['blue']]
        images = load_fingerprints_parallel(paths, show_progress=False)
        assert [img.path for img in images] == paths
        assert images[0].fingerprint.source_size == (120, 80)

    def test_empty_list(self):
        assert load_fingerprints_parallel([]) == ()

    def test_decode_error_raised_by_default(self, image_dir):
        good = make_image(image_dir / "good.png")
        bad = image_dir / "bad.png"
        bad.write_text("not an image")

        with pytest.raises(DecodeError) as exc_info:
            load_fingerprints_parallel([good, str(bad)], show_progress=False)
        assert exc_info.value.path == str(bad)

    def test_first_failure_in_path_order(self, image_dir):
        """With several failures the earliest path is reported."""
        paths = []
        for name in ("a_bad.png", "b_good.png", "c_bad.png"):
            path = image_dir / name
            if "bad" in name:
                path.write_text("broken")
                paths.append(str(path))
            else:
                paths.append(make_image(path))

        with pytest.raises(DecodeError) as exc_info:
            load_fingerprints_parallel(paths, max_workers=3, show_progress=False)
        assert exc_info.value.path.endswith("a_bad.png")

    def test_skip_errors(self, image_dir):
        good = make_image(image_dir / "good.png")
        bad = image_dir / "bad.png"
        bad.write_text("not an image")

        images = load_fingerprints_parallel([str(bad), good], skip_errors=True, show_progress=False)
        assert [img.path for img in images] == [good]

    def test_vanished_file_is_skipped(self, image_dir):
        """A file removed after discovery is handled like an undecodable one."""
        good = make_image(image_dir / "a.png")
        gone = str(image_dir / "gone.png")

        images = load_fingerprints_parallel([good, gone], skip_errors=True, show_progress=False)
        assert [img.path for img in images] == [good]

        with pytest.raises(DecodeError):
            load_fingerprints_parallel([good, gone], show_progress=False)

    def test_progress_callback_reaches_total(self, sample_images):
        calls = []
        paths = [sample_images[k] for k in ('red1', 'red2', 'blue')]
        load_fingerprints_parallel(
            paths,
            progress_callback=lambda cur, total: calls.append((cur, total)),
            show_progress=False,
        )
        assert calls[-1] == (3, 3)

    def test_uses_given_cache(self, sample_images):
        cache = FingerprintCache(scale_image)
        paths = [sample_images['red1'], sample_images['red2']]
        load_fingerprints_parallel(paths, cache=cache, show_progress=False)
        assert cache.stats.cache_misses == 2

        load_fingerprints_parallel(paths, cache=cache, show_progress=False)
        assert cache.stats.cache_hits == 2


class TestCountCombinations:
    """Test count_combinations function."""

    @pytest.mark.parametrize("n,expected", [(0, 0), (1, 0), (2, 1), (5, 10), (100, 4950)])
    def test_pair_counts(self, n, expected):
        assert count_combinations(n) == expected


class TestCompareAllPairs:
    """Test compare_all_pairs function."""

    @pytest.mark.parametrize("n", [2, 5, 10])
    def test_every_pair_scored_once(self, fingerprint_factory, n):
        fingerprints = [fingerprint_factory(pixels=[i, 0, 0, 0]) for i in range(n)]
        scorer = SpyScorer()

        compare_all_pairs(fingerprints, scorer=scorer, show_progress=False)

        assert len(scorer.calls) == n * (n - 1) // 2
        pairs = {(fingerprints.index(a), fingerprints.index(b)) for a, b in scorer.calls}
        assert len(pairs) == len(scorer.calls)
        assert all(i < j for i, j in pairs)

    def test_matches_at_threshold(self, fingerprint_factory):
        fingerprints = [fingerprint_factory(), fingerprint_factory()]
        matches = compare_all_pairs(
            fingerprints, threshold=0.5, scorer=SpyScorer(0.5), show_progress=False
        )
        assert matches == [Match(0, 1, 0.5)]

    def test_below_threshold_not_reported(self, fingerprint_factory):
        fingerprints = [fingerprint_factory(), fingerprint_factory()]
        matches = compare_all_pairs(
            fingerprints, threshold=0.9, scorer=SpyScorer(0.89), show_progress=False
        )
        assert matches == []

    def test_discovery_order(self, fingerprint_factory):
        same = fingerprint_factory(pixels=[9, 9, 9, 0])
        other = fingerprint_factory(pixels=[200, 0, 50, 0])
        matches = compare_all_pairs([same, other, same, same], show_progress=False)
        assert [(m.index_a, m.index_b) for m in matches] == [(0, 2), (0, 3), (2, 3)]
        assert all(m.coefficient == 1.0 for m in matches)

    def test_progress_callback_interval(self, fingerprint_factory):
        calls = []
        compare_all_pairs(
            [fingerprint_factory() for _ in range(5)],
            progress_callback=lambda done, total: calls.append((done, total)),
            progress_interval=3,
            show_progress=False,
        )
        assert calls == [(3, 10), (6, 10), (9, 10), (10, 10)]

    def test_too_few_fingerprints(self, fingerprint_factory):
        scorer = SpyScorer()
        assert compare_all_pairs([fingerprint_factory()], scorer=scorer) == []
        assert scorer.calls == []


class TestCompareOneToMany:
    """Test compare_one_to_many function."""

    def test_extra_is_always_second_index(self, fingerprint_factory):
        same = fingerprint_factory(pixels=[9, 9, 9, 0])
        other = fingerprint_factory(pixels=[200, 0, 50, 0])
        matches = compare_one_to_many([same, other, same], same, show_progress=False)
        assert matches == [Match(0, 3, 1.0), Match(2, 3, 1.0)]

    def test_one_comparison_per_image(self, fingerprint_factory):
        scorer = SpyScorer()
        collection = [fingerprint_factory() for _ in range(4)]
        compare_one_to_many(collection, fingerprint_factory(), scorer=scorer, show_progress=False)
        assert len(scorer.calls) == 4

    def test_progress_callback(self, fingerprint_factory):
        calls = []
        compare_one_to_many(
            [fingerprint_factory() for _ in range(3)],
            fingerprint_factory(),
            progress_callback=lambda done, total: calls.append((done, total)),
            progress_interval=2,
            show_progress=False,
        )
        assert calls == [(2, 3), (3, 3)]


class TestScanDirectory:
    """Test scan_directory function."""

    def test_fingerprints_in_sorted_order(self, sample_images, image_dir):
        images = scan_directory(image_dir, show_progress=False)
        names = [img.filename for img in images]
        assert names == ["blue.png", "gradient.png", "red1.png", "red2.png", "red_large.png"]

    def test_creates_cache_directory(self, sample_images, image_dir):
        """Fingerprints are written next to the scanned directory."""
        scan_directory(image_dir, show_progress=False)
        cached = sorted(os.listdir(image_dir.parent / "photos_scaled"))
        assert cached == ["blue.dat", "gradient.dat", "red1.dat", "red2.dat", "red_large.dat"]

    def test_empty_directory(self, image_dir):
        assert scan_directory(image_dir, show_progress=False) == ()

    def test_exclude(self, image_dir):
        keep = make_image(image_dir / "keep.png")
        skip = make_image(image_dir / "skip.png")
        images = scan_directory(
            image_dir, show_progress=False, exclude={os.path.realpath(skip)}
        )
        assert [img.path for img in images] == [keep]


class TestFindSimilarImages:
    """Test find_similar_images function."""

    def test_finds_identical_images(self, sample_images, image_dir):
        """Three red images of different sizes form three pairs."""
        scan = find_similar_images(image_dir, show_progress=False)

        assert scan.mode == "all-pairs"
        assert scan.comparisons == 10
        assert [(m.index_a, m.index_b) for m in scan.matches] == [(2, 3), (2, 4), (3, 4)]
        assert all(m.coefficient == pytest.approx(1.0, abs=1e-3) for m in scan.matches)

    def test_decode_error_aborts_scan(self, sample_images, image_dir):
        (image_dir / "broken.png").write_text("not an image")
        with pytest.raises(DecodeError):
            find_similar_images(image_dir, show_progress=False)

    def test_skip_errors(self, sample_images, image_dir):
        (image_dir / "broken.png").write_text("not an image")
        scan = find_similar_images(image_dir, skip_errors=True, show_progress=False)
        assert len(scan.images) == 5
        assert scan.match_count == 3

    def test_single_image_in_directory_is_insufficient(self, image_dir):
        make_image(image_dir / "only.png")
        with pytest.raises(InsufficientImagesError) as exc_info:
            find_similar_images(image_dir, show_progress=False)
        assert exc_info.value.image_count == 1
        assert exc_info.value.required == 2

    def test_empty_directory_is_insufficient(self, image_dir):
        with pytest.raises(InsufficientImagesError):
            find_similar_images(image_dir, show_progress=False)

    def test_same_stem_files_not_confused(self, image_dir):
        """Different images sharing a cache file are not reported as duplicates."""
        jpg = image_dir / "photo.jpg"
        jpeg = image_dir / "photo.jpeg"
        Image.new('RGB', (100, 100), color='red').save(jpg, format='BMP')
        Image.new('RGB', (100, 100), color='blue').save(jpeg, format='BMP')
        mtime_ns = jpg.stat().st_mtime_ns
        os.utime(jpeg, ns=(mtime_ns, mtime_ns))

        for _ in range(2):
            scan = find_similar_images(image_dir, show_progress=False)
            assert scan.matches == []

    def test_missing_directory(self, temp_dir):
        with pytest.raises(InvalidPathError):
            find_similar_images(temp_dir / "missing", show_progress=False)

    def test_progress_callback(self, sample_images, image_dir):
        calls = []
        find_similar_images(
            image_dir,
            progress_callback=lambda done, total: calls.append((done, total)),
            progress_interval=2,
            show_progress=False,
        )
        assert calls == [(2, 10), (4, 10), (6, 10), (8, 10), (10, 10)]


class TestFindSimilarToSingleImage:
    """Test find_similar_images with a single extra image."""

    def test_extra_image_appended(self, sample_images, image_dir, temp_dir):
        extra = make_image(temp_dir / "query.png")
        scan = find_similar_images(image_dir, single_image=extra, show_progress=False)

        assert scan.mode == "one-vs-many"
        assert scan.comparisons == 5
        assert len(scan.images) == 6
        assert scan.images[-1].path == extra
        assert [(m.index_a, m.index_b) for m in scan.matches] == [(2, 5), (3, 5), (4, 5)]

    def test_extra_image_not_cached(self, image_dir, temp_dir):
        make_image(image_dir / "a.png")
        extra = make_image(temp_dir / "query.png")
        find_similar_images(image_dir, single_image=extra, show_progress=False)
        assert not (temp_dir.parent / (temp_dir.name + "_scaled")).exists()

    def test_extra_image_inside_directory_is_excluded(self, image_dir):
        """The image is never compared with itself."""
        a = make_image(image_dir / "a.png")
        make_image(image_dir / "b.png")
        scan = find_similar_images(image_dir, single_image=a, show_progress=False)

        assert [img.filename for img in scan.images] == ["b.png", "a.png"]
        assert [(m.index_a, m.index_b) for m in scan.matches] == [(0, 1)]

    def test_missing_single_image(self, sample_images, image_dir, temp_dir):
        with pytest.raises(InvalidPathError):
            find_similar_images(
                image_dir, single_image=temp_dir / "missing.png", show_progress=False
            )

    def test_empty_directory_is_insufficient(self, image_dir, temp_dir):
        extra = make_image(temp_dir / "query.png")
        with pytest.raises(InsufficientImagesError) as exc_info:
            find_similar_images(image_dir, single_image=extra, show_progress=False)
        assert exc_info.value.required == 1

    def test_undecodable_single_image(self, sample_images, image_dir, temp_dir):
        extra = temp_dir / "query.png"
        extra.write_text("not an image")
        with pytest.raises(DecodeError):
            find_similar_images(image_dir, single_image=extra, show_progress=False)
