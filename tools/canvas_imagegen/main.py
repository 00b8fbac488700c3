import logging
import os
import sys
from logging.handlers import TimedRotatingFileHandler

from dify_plugin import Plugin, DifyPluginEnv

LOG_DIR = '/app/storage/plugin-logs'


def setup_logging(log_dir: str = LOG_DIR):
    """
    Configure logging for the plugin.

    The plugin daemon does not surface plugin stdout, so logs also go to a
    daily rotated file under /app/storage/plugin-logs. When that directory is
    not writable (CI, local debugging) only console logging is kept.
    """
    for handler in logging.root.handlers[:]:
        logging.root.removeHandler(handler)

    log_format = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(log_format)
    console_handler.setLevel(logging.INFO)

    file_handler = None
    try:
        os.makedirs(log_dir, exist_ok=True)
        file_handler = TimedRotatingFileHandler(
            filename=os.path.join(log_dir, 'plugin_canvas_imagegen.log'),
            when='D',
            interval=1,
            backupCount=15,
            encoding='utf-8',
        )
        file_handler.setFormatter(log_format)
        file_handler.setLevel(logging.INFO)
    except (PermissionError, OSError):
        pass

    logging.root.setLevel(logging.INFO)
    logging.root.addHandler(console_handler)

    if file_handler:
        logging.root.addHandler(file_handler)
        logging.info("file logging enabled")
    else:
        logging.info("file logging disabled (console only)")


setup_logging()

# a batch of 6 with rate-limit waits can easily run past the default timeout
plugin = Plugin(DifyPluginEnv(MAX_REQUEST_TIMEOUT=900))

if __name__ == '__main__':
    try:
        plugin.run()
    except Exception as e:
        logging.error(f"canvas imagegen plugin error: {str(e)}", exc_info=True)
    finally:
        logging.info("canvas imagegen plugin finished")
