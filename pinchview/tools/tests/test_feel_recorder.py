from pinchview.core.config import DEFAULT_PRESET
from pinchview.core.types import EventType, Viewport
from pinchview.interpreter.state_machine import FrameInterpreter
from pinchview.runtime.layout import ThumbnailGrid
from pinchview.runtime.run_loop import FakeSource
from pinchview.tools.feel_recorder import FeelRecorder, read_trace
from pinchview.tools.replay import replay

VP = Viewport(1280, 720)


def live_session(path, until_ms=8000, step_ms=20):
    grid = ThumbnailGrid(VP)
    interp = FrameInterpreter(DEFAULT_PRESET, hit_test=grid.hit_test)
    src = FakeSource(start_ms=0)
    outs = []
    with FeelRecorder(path) as rec:
        for t in range(0, until_ms, step_ms):
            result = src.frame(t)
            out = interp.advance(result, VP)
            rec.write(result, VP, out)
            outs.append(out)
    return outs


def events(outs, type_):
    return [e for o in outs for e in o.events if e.type == type_]


def test_fake_session_opens_and_closes(tmp_path):
    outs = live_session(tmp_path / "feel.jsonl")
    opens = events(outs, EventType.OPEN)
    assert [e.open.item_id for e in opens] == ["2"]
    assert len(events(outs, EventType.CLOSE)) == 1
    assert opens[0].t_ms < events(outs, EventType.CLOSE)[0].t_ms


def test_trace_reads_back_detections(tmp_path):
    path = tmp_path / "feel.jsonl"
    live_session(path, until_ms=200)
    src = FakeSource(start_ms=0)
    for (result, vp), t in zip(read_trace(path), range(0, 200, 20)):
        assert vp == VP
        assert result == src.frame(t)


def test_replay_reproduces_live_session(tmp_path):
    path = tmp_path / "feel.jsonl"
    live = live_session(path)
    assert replay(path) == live
