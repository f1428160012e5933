"""Tests for packet processing."""

from conftest import RecordingSubmitter, make_weather_message
from erddap_feeder.ais.processor import PacketProcessor
from erddap_feeder.erddap.client import ErddapSubmissionError


def test_accepted_message_is_submitted(feeder_context, submitter):
    processor = PacketProcessor(feeder_context, submitter)

    summary = processor.process([make_weather_message()])

    assert summary.to_dict() == {
        "total": 1,
        "submitted": 1,
        "skipped": 0,
        "ignored": 0,
        "errors": 0,
        "failed": 0,
    }
    assert submitter.submissions == [
        [
            ("latitude", "49.123"),
            ("longitude", "-123.457"),
            ("time", "2023-06-15T12:00:00Z"),
            ("Signal_Power", "-23.457"),
            ("Station_ID", "Example Light Station"),
            ("mmsi", "316001234"),
            ("Wind_Gust_Speed", "18"),
            ("Wind_Speed", "12"),
            ("author", "author_key"),
        ]
    ]


def test_unfiltered_weather_fields_never_appear(feeder_context, submitter):
    PacketProcessor(feeder_context, submitter).process([make_weather_message()])

    names = [name for name, _ in submitter.submissions[0]]
    assert "wgust" not in names
    assert "waveheight" not in names
    assert "pressure" not in names


def test_ignored_mmsi(feeder_context, submitter):
    processor = PacketProcessor(feeder_context, submitter)

    summary = processor.process([make_weather_message(mmsi=111), make_weather_message(mmsi=222)])

    assert summary.ignored == 1
    assert summary.submitted == 1
    assert len(submitter.submissions) == 1
    assert ("mmsi", "222") in submitter.submissions[0]
    assert ("Station_ID", "UNKNOWN") in submitter.submissions[0]


def test_exclusion_uses_decoded_mmsi(feeder_context, submitter):
    summary = PacketProcessor(feeder_context, submitter).process([make_weather_message(mmsi=111.0)])

    assert summary.ignored == 1
    assert submitter.submissions == []


def test_unknown_identifier_is_skipped_without_decoding(feeder_context, submitter):
    # No mmsi or rxtime: decoding would fail if attempted
    messages = [
        {"type": 1},
        {"type": 8},
        {"type": 8, "dac": 200, "fid": 31},
    ]

    summary = PacketProcessor(feeder_context, submitter).process(messages)

    assert summary.total == 3
    assert summary.skipped == 3
    assert summary.errors == 0
    assert submitter.submissions == []


def test_end_to_end_counts(feeder_context, submitter):
    messages = [
        make_weather_message(mmsi=316001234),
        {"type": 1, "mmsi": 316000001, "lat": 49.0, "lon": -123.0},
        make_weather_message(mmsi=111),
        {"type": 5, "mmsi": 316000002},
        make_weather_message(mmsi=222),
    ]

    summary = PacketProcessor(feeder_context, submitter).process(messages)

    assert summary.total == 5
    assert summary.submitted == 2
    assert summary.skipped == 2
    assert summary.ignored == 1
    assert len(submitter.submissions) == 2


def test_decode_failure_does_not_stop_packet(feeder_context, submitter, caplog):
    broken = make_weather_message(rxtime="not a time")
    messages = [broken, {"dac": 1}, make_weather_message(waveheight="x"), make_weather_message()]

    summary = PacketProcessor(feeder_context, submitter).process(messages, source="rx1")

    assert summary.total == 4
    assert summary.errors == 3
    assert summary.submitted == 1
    assert len(submitter.submissions) == 1
    assert "Failed to decode message" in caplog.text


def test_submission_failure_is_counted(feeder_context):
    failing = RecordingSubmitter(error=ErddapSubmissionError("boom", status_code=500))

    summary = PacketProcessor(feeder_context, failing).process(
        [make_weather_message(), make_weather_message(mmsi=222)]
    )

    assert summary.submitted == 2
    assert summary.failed == 2
    assert len(failing.submissions) == 2


def test_submission_order_matches_input(feeder_context, submitter):
    messages = [make_weather_message(mmsi=m) for m in (300, 100, 200)]

    PacketProcessor(feeder_context, submitter).process(messages)

    mmsis = [dict(args)["mmsi"] for args in submitter.submissions]
    assert mmsis == ["300", "100", "200"]
