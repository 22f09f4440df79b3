import logging
import sys
import os
import re

class WarningMessageFilter(logging.Filter):
    """Drops known-harmless library warnings and shortens the rest to one line."""

    ignore_phrases = [
        "Workbook contains no default style",
        "Data Validation extension is not supported",
        "Could not infer format, so each element will be parsed individually",
    ]

    def filter(self, record):
        if not hasattr(record, 'msg'):
            return True

        # captured warnings are logged as ("%s", text)
        msg = record.getMessage().strip()
        if any(phrase in msg for phrase in self.ignore_phrases):
            return False

        if record.levelno == logging.WARNING:
            # captured warnings arrive as "path:123: Category: message\n  source"
            if '\n' in msg:
                msg = msg.split('\n')[0]
            match = re.search(r':\d+:\s*([^:]+):\s*(.*)$', msg)
            if match:
                record.msg = f"{match.group(1).strip()}: {match.group(2).strip()}"
                record.args = ()

        return True

def setup_main_logging(verbosity_level: int, log_name: str, log_dir: str = "logs"):
    """
    Configures the root logger.
    Logs to both the console and a named file in log_dir.

    Verbosity levels:
    0 (default): WARNING
    1 (-v):      INFO
    2+ (-vv...): DEBUG

    Returns:
        Tuple of (log_level, log_file_path)
    """
    if verbosity_level <= 0:
        log_level = logging.WARNING
    elif verbosity_level == 1:
        log_level = logging.INFO
    else:
        log_level = logging.DEBUG

    os.makedirs(log_dir, exist_ok=True)

    # Never overwrite an earlier log: name.log, name(1).log, name(2).log ...
    log_file_path = os.path.join(log_dir, f"{log_name}.log")
    counter = 1
    while os.path.exists(log_file_path):
        log_file_path = os.path.join(log_dir, f"{log_name}({counter}).log")
        counter += 1

    warning_filter = WarningMessageFilter()
    handlers = [
        logging.StreamHandler(sys.stdout),
        logging.FileHandler(log_file_path)
    ]
    for h in handlers:
        h.addFilter(warning_filter)

    logging.basicConfig(
        level=log_level,
        format="[%(asctime)s] [%(name)-30s] [%(levelname)-8s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=handlers,
        force=True
    )

    logging.captureWarnings(True)
    logging.getLogger("matplotlib").setLevel(logging.WARNING)
    logging.getLogger("PIL").setLevel(logging.WARNING)

    logging.getLogger(__name__).info(
        f"Logger configured. Level: {logging.getLevelName(log_level)}. Log file: {log_file_path}"
    )
    return log_level, log_file_path
