import io
import uuid

import pytest

from icefactory.counters import counter_stations, main, run_counters, selected_counters
from icefactory.shm_layout import DEFAULT_NAMES, remove_segment, write_segment


@pytest.fixture
def segment():
    name = f"icf{uuid.uuid4().hex[:10]}"
    write_segment(name, DEFAULT_NAMES)
    yield name
    remove_segment(name)


def test_counter_stations_numbers_and_finish():
    stations = counter_stations()
    assert [s.number for s in stations] == list(range(1, 11))
    assert [s.finishes for s in stations].count(True) == 1
    assert stations[-1].finishes
    assert stations[4].phase == "PACKAGING"
    assert not stations[4].finishes
    assert stations[5].announces_order


def test_selected_counters_takes_prefix():
    stations = counter_stations()
    assert selected_counters(3) == [tuple(stations[:3])]
    assert selected_counters(10) == [tuple(stations)]


def test_selected_counters_five_runs_two_batches():
    stations = counter_stations()
    assert selected_counters(5) == [tuple(stations[:5]), tuple(stations[:6])]


@pytest.mark.parametrize("count", [0, 11, -1])
def test_selected_counters_rejects_out_of_range(count):
    with pytest.raises(ValueError):
        selected_counters(count)


def test_run_counters_uses_names_in_order():
    buf = io.StringIO()
    run_counters(2, list(DEFAULT_NAMES), delay=0, out=buf)
    text = buf.getvalue()
    assert "Cone counter is processing" in text
    assert "Cream counter is processing" in text
    assert "COUNTER3" not in text


def test_run_counters_five_repeats_first_batch():
    buf = io.StringIO()
    run_counters(5, list(DEFAULT_NAMES), delay=0, out=buf)
    text = buf.getvalue()
    assert text.count("Cone counter is processing") == 2
    assert text.count("Vanila Flavour counter is processing") == 1


def test_run_counters_ten_finishes_once():
    buf = io.StringIO()
    run_counters(10, list(DEFAULT_NAMES), delay=0, out=buf)
    text = buf.getvalue()
    assert text.count("CONGRATULATION Sir, ICE-CREAM is ready") == 1
    markers = [
        "enter" if "Now in critical region" in line else "leave"
        for line in text.splitlines()
        if "Now in critical region" in line or "is passed Sir" in line
    ]
    assert markers == ["enter", "leave"] * 10


def test_run_counters_needs_enough_names():
    with pytest.raises(ValueError):
        run_counters(4, ["Cone", "Cream"], delay=0, out=io.StringIO())


def test_main_reads_segment_and_prompt(segment, monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO("1\n"))
    assert main(["--segment", segment, "--delay", "0"]) == 0
    out = capsys.readouterr().out
    assert "enter number of counters you want" in out
    assert "Cone counter is processing" in out
    assert "COUNTER2" not in out


def test_main_invalid_count_prints_error(segment, capsys):
    assert main(["--segment", segment, "--count", "12", "--delay", "0"]) == 1
    assert "error" in capsys.readouterr().out


def test_main_non_numeric_input(segment, monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO("many\n"))
    assert main(["--segment", segment, "--delay", "0"]) == 1
    assert capsys.readouterr().out.rstrip().endswith("error")


def test_main_missing_segment(capsys):
    name = f"icf{uuid.uuid4().hex[:10]}"
    assert main(["--segment", name, "--count", "1", "--delay", "0"]) == 1
    assert "error" in capsys.readouterr().err