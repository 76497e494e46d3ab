from safetysnap import config
from safetysnap.pixels import PixelBuffer
from safetysnap.regions import crop, scan_regions, whole_image
from synthetic import canvas


def test_helmet_scan_covers_top_half_only():
    buf = PixelBuffer(canvas(100, 80))
    windows = list(scan_regions(buf, config.SCAN_PLANS[config.HELMET]))
    assert len(windows) == 3 * 7
    assert {r.y for r in windows} == {0, 16, 32}
    assert max(r.x for r in windows) == 96


def test_vest_scan_band():
    buf = PixelBuffer(canvas(100, 100))
    scan = scan_regions(buf, config.SCAN_PLANS[config.VEST])
    assert sorted({r.y for r in scan}) == [20, 44, 68]
    assert len(scan) == 15


def test_scan_is_restartable():
    buf = PixelBuffer(canvas(120, 90))
    scan = scan_regions(buf, config.SCAN_PLANS[config.PERSON])
    first = [r.box() for r in scan]
    second = [r.box() for r in scan]
    assert first == second and first


def test_windows_are_clipped_not_wrapped():
    buf = PixelBuffer(canvas(100, 80))
    r = crop(buf, 90, 70, 32, 32)
    assert r.box() == (90, 70, 10, 10)
    assert r.pixels.shape == (10, 10, 3)
    assert crop(buf, 200, 200, 32, 32).empty
    assert crop(buf, -10, 0, 32, 32).box() == (0, 0, 22, 32)


def test_tiny_image_has_no_band_windows():
    buf = PixelBuffer(canvas(1, 1))
    assert list(scan_regions(buf, config.SCAN_PLANS[config.HELMET])) == []
    assert list(scan_regions(buf, config.SCAN_PLANS[config.VEST])) == []
    assert whole_image(buf).box() == (0, 0, 1, 1)
