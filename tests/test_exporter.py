from __future__ import annotations

import io

from archive_harvester.engine import TimestampedURL
from archive_harvester.engine.exporter import StreamExporter


def test_stream_exporter_plain_mode() -> None:
    stream = io.StringIO()
    exporter = StreamExporter(stream)
    exporter.export(TimestampedURL(url="http://a.com/x", date="20180102150405"))
    exporter.export(TimestampedURL(url="http://a.com/y", date=""))
    exporter.close()

    assert stream.getvalue() == "http://a.com/x\nhttp://a.com/y\n"
    assert exporter.count == 2


def test_stream_exporter_date_mode() -> None:
    stream = io.StringIO()
    exporter = StreamExporter(stream, dates=True)
    exporter.export(TimestampedURL(url="http://a.com/x", date="20180102150405"))
    exporter.flush()

    assert stream.getvalue() == "2018-01-02T15:04:05Z http://a.com/x\n"
    assert not stream.closed
