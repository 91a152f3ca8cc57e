from pyrn.logging import setup_logger
import logging

# pytest captures log output itself - console_output=False avoids
# duplication. The pyrn logger already exists once pyrn is imported, so it is
# set up again here rather than fetched with get_logger.
setup_logger(level=logging.DEBUG, console_output=False)
