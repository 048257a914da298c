import io

import pytest

from icefactory.factory import build_line, main, run_factory


def _markers(text):
    markers = []
    for line in text.splitlines():
        if "Now in critical region" in line:
            markers.append("enter")
        elif "is passed Sir" in line:
            markers.append("leave")
    return markers


def test_build_line_items_in_order():
    items = [item for _, item in build_line()]
    assert items == [
        "Cone",
        "Cream",
        "Extra Topping",
        "Special Flavor",
        "Distribution and Packaging",
    ]


def test_build_line_only_last_station_finishes():
    stations = [station for station, _ in build_line()]
    assert [station.finishes for station in stations] == [False, False, False, False, True]
    assert [station.number for station in stations] == [1, 2, 3, 4, 5]
    assert stations[0].announces_order
    assert stations[4].phase == "PACKAGING"


def test_run_factory_processes_each_item_every_round():
    buf = io.StringIO()
    run_factory(rounds=2, delay=0, out=buf)
    text = buf.getvalue()
    for _, item in build_line():
        assert text.count(f"{item} counter is processing") == 2
        assert text.count(f"{item} counter of icecream factory is passed Sir") == 2
    assert text.count("CONGRATULATION Sir, ICE-CREAM is ready") == 2


def test_run_factory_critical_regions_do_not_interleave():
    buf = io.StringIO()
    run_factory(rounds=2, delay=0.01, out=buf)
    assert _markers(buf.getvalue()) == ["enter", "leave"] * 10


def test_run_factory_zero_rounds_writes_nothing():
    buf = io.StringIO()
    run_factory(rounds=0, delay=0, out=buf)
    assert buf.getvalue() == ""


def test_run_factory_rejects_negative_rounds():
    with pytest.raises(ValueError):
        run_factory(rounds=-1, delay=0, out=io.StringIO())


def test_main_runs_requested_rounds(capsys):
    assert main(["--rounds", "1", "--delay", "0"]) == 0
    out = capsys.readouterr().out
    assert out.count("CONGRATULATION Sir, ICE-CREAM is ready") == 1
    assert "COUNTER1: Now in critical region..." in out


def test_main_reports_negative_rounds(capsys):
    assert main(["--rounds", "-2", "--delay", "0"]) == 1
    assert "error" in capsys.readouterr().err