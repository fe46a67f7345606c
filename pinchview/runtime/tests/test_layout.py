from pinchview.core.types import Target, TargetKind, Viewport
from pinchview.runtime.layout import FILES, ThumbnailGrid

ITEMS = frozenset({TargetKind.ITEM})
CLOSE = frozenset({TargetKind.CLOSE})


def test_one_cell_per_file():
    g = ThumbnailGrid(Viewport(1280, 720))
    assert [t.id for t, _ in g.cells] == [f.id for f in FILES]


def test_centre_hits_middle_item():
    g = ThumbnailGrid(Viewport(1280, 720))
    assert g.hit_test(640, 360, ITEMS) == Target(TargetKind.ITEM, "2")
    assert g.hit_test(640, 360, CLOSE) is None


def test_close_button_only_when_eligible():
    g = ThumbnailGrid(Viewport(1280, 720))
    r = g.close_rect
    cx, cy = r.x + r.w / 2, r.y + r.h / 2
    assert g.hit_test(cx, cy, CLOSE) == Target(TargetKind.CLOSE, "close")
    assert g.hit_test(cx, cy, ITEMS) is None


def test_gaps_hit_nothing():
    g = ThumbnailGrid(Viewport(1280, 720))
    assert g.hit_test(5, 360, ITEMS) is None
    assert g.hit_test(640, 5, ITEMS) is None


def test_relayout_follows_viewport():
    g = ThumbnailGrid(Viewport(1280, 720))
    before = g.rect_of("3")
    g.relayout(Viewport(640, 480))
    after = g.rect_of("3")
    assert after.x + after.w <= 640
    assert after != before
    assert g.file_of("3").name == "Forest"
