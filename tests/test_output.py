import io
import logging

import pytest

from toolinit.output import OutputTarget, configure_logging


def test_human_format() -> None:
    stream = io.StringIO()
    configure_logging(stream=stream)
    log = logging.getLogger("toolinit.test")

    log.info("Added dependency.")
    log.warning("No title.", extra={"location_file": "toolinit.yaml", "location_line": 3})
    log.error("Failed.")

    assert stream.getvalue().splitlines() == [
        "ℹ️ Added dependency.",
        "⚠️ toolinit.yaml:3: No title.",
        "❌ Failed.",
    ]


def test_ide_format() -> None:
    stream = io.StringIO()
    configure_logging(target="ide", stream=stream)
    log = logging.getLogger("toolinit.test")

    log.info("Added dependency.", extra={"location_file": "toolinit.yaml"})
    log.error("Failed.")

    assert stream.getvalue().splitlines() == [
        "toolinit.yaml: info: toolinit: Added dependency.",
        "error: toolinit: Failed.",
    ]


def test_verbose_controls_debug_output() -> None:
    stream = io.StringIO()
    configure_logging(stream=stream)
    logging.getLogger("toolinit.test").debug("hidden")
    assert stream.getvalue() == ""

    configure_logging(verbose=True, target=OutputTarget.IDE, stream=stream)
    logging.getLogger("toolinit.test").debug("shown")
    assert stream.getvalue() == "verbose: toolinit: shown\n"


def test_reconfiguring_replaces_handler() -> None:
    configure_logging(stream=io.StringIO())
    logger = configure_logging(stream=io.StringIO())
    assert len(logger.handlers) == 1


def test_unknown_target_is_rejected() -> None:
    with pytest.raises(ValueError):
        configure_logging(target="xml")
