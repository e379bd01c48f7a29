import io
import logging

from anki_french.common.logging_config import setup_logging


def test_extra_fields_are_appended():
    stream = io.StringIO()
    setup_logging("DEBUG", stream=stream)

    logging.getLogger("anki_french.processor").info("stored media: a.mp3", extra={"deck": "French::Words"})

    line = stream.getvalue().strip()
    assert "[INFO] anki_french.processor: stored media: a.mp3" in line
    assert line.endswith("| deck=French::Words")
    assert "\033[" not in line


def test_level_filters_and_no_duplicate_handlers():
    stream = io.StringIO()
    setup_logging("WARNING", stream=stream)
    setup_logging("WARNING", stream=stream)

    log = logging.getLogger("anki_french.lookup")
    log.info("hidden")
    log.warning("shown")

    assert stream.getvalue().count("shown") == 1
    assert "hidden" not in stream.getvalue()
