# File: tests/test_report.py
import io
import json

from discover.probe import ProbeResult
from discover.report import JsonLinesSink, TextSink, format_line
from discover.request import build_request


def make_result(make_config, word="admin", status=301, size=178):
    cfg = make_config(target="http://x/app")
    return ProbeResult(build_request(cfg, word), status=status, size=size)


def test_format_line(make_config):
    result = make_result(make_config)
    assert format_line(result) == "/admin 301 178"
    assert format_line(result, show_size=False) == "/admin 301"


def test_text_sink_writes_one_line_per_result(make_config):
    stream = io.StringIO()
    sink = TextSink(stream)
    sink.emit(make_result(make_config, "a", 200, 1))
    sink.emit(make_result(make_config, "b", 403, 0))
    assert stream.getvalue() == "/a 200 1\n/b 403 0\n"


def test_json_lines_sink(make_config):
    stream = io.StringIO()
    JsonLinesSink(stream).emit(make_result(make_config))
    assert json.loads(stream.getvalue()) == {
        "path": "/admin",
        "url": "http://x/app/admin",
        "status": 301,
        "size": 178,
    }
