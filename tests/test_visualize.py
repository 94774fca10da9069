from pathlib import Path

import matplotlib.pyplot as plt
import numpy as np

from linkmon.simulator.metrics import MetricKind
from linkmon.simulator.recorder import MetricsRecorder
from linkmon.simulator.channel import LinkMetrics
from linkmon.simulator.visualize import MatplotlibSink, PairSeries, RedrawEvent


def test_matplotlib_sink_redraws_from_scratch(tmp_path: Path):
    sink = MatplotlibSink(save_dir=tmp_path, show=False)
    event = RedrawEvent(
        kind=MetricKind.BER,
        step=2,
        x=np.array([1, 2]),
        series=[
            PairSeries(pair=(1, 2), label="Agent 1 to Agent 2", values=np.array([0.1, 0.2])),
            PairSeries(pair=(1, 3), label="Agent 1 to Agent 3", values=np.array([0.3, 0.4])),
        ],
    )
    sink.redraw(event)
    sink.redraw(event)

    ax = sink.axes[MetricKind.BER]
    assert len(ax.lines) == 2
    assert [line.get_label() for line in ax.lines] == ["Agent 1 to Agent 2", "Agent 1 to Agent 3"]
    assert ax.get_xlabel() == "Time Steps"
    assert ax.get_ylabel() == "Bit Error Rate"
    assert ax.get_title() == "Bit Error Rates Between Agents"
    assert (tmp_path / "ber.png").exists()
    assert (tmp_path / "ber.svg").exists()
    sink.close()


def test_recorder_drives_matplotlib_sink(tmp_path: Path):
    sink = MatplotlibSink(save_dir=tmp_path, show=False)
    rec = MetricsRecorder([sink], refresh_every=3)
    att = np.triu(np.full((3, 3), 120.0), k=1)
    for _ in range(3):
        rec.record_metrics(LinkMetrics(att, -15.0 - att, att * 0.0))

    for kind in MetricKind:
        assert (tmp_path / f"{kind.value}.png").exists()
        assert len(sink.axes[kind].lines) == 3
    assert list(sink.axes[MetricKind.ATTENUATION].lines[0].get_xdata()) == [1, 2, 3]
    sink.close()


def test_two_sinks_keep_their_own_figures(tmp_path: Path):
    first = MatplotlibSink(save_dir=tmp_path / "a", show=False)
    second = MatplotlibSink(save_dir=tmp_path / "b", show=False)
    rec = MetricsRecorder([first], refresh_every=1)
    att = np.triu(np.full((3, 3), 120.0), k=1)
    rec.record_metrics(LinkMetrics(att, -15.0 - att, att * 0.0))

    for kind in MetricKind:
        assert first.figures[kind] is not second.figures[kind]
        assert first.axes[kind] in first.figures[kind].axes
        assert len(first.axes[kind].lines) == 3
        assert len(second.axes[kind].lines) == 0
    assert len(first.figures[MetricKind.ATTENUATION].axes[0].lines) == 3

    second.close()
    assert plt.fignum_exists(first.figures[MetricKind.ATTENUATION].number)
    assert not plt.fignum_exists(second.figures[MetricKind.ATTENUATION].number)
    first.close()


def test_block_only_for_interactive_sinks(tmp_path: Path, monkeypatch):
    shown = []
    monkeypatch.setattr(plt, "show", lambda *a, **k: shown.append(True))

    saving = MatplotlibSink(save_dir=tmp_path, show=True)
    saving.block()
    headless = MatplotlibSink(show=False)
    headless.block()
    assert shown == []

    interactive = MatplotlibSink(show=True)
    interactive.block()
    assert shown == [True]
    for sink in (saving, headless, interactive):
        sink.close()
