import logging

from systemd.journal import JournalHandler


def setup_logger() -> None:
    """Configure logging to use systemd journal.
    """
    app_logger = logging.getLogger('unitctl')
    app_logger.setLevel(logging.DEBUG)

    journal_handler = JournalHandler(SYSLOG_IDENTIFIER='unitctl')

    app_logger.addHandler(journal_handler)
