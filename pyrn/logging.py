"""
Logging for the pyrn compiler.

All pyrn loggers live under the ``pyrn`` namespace. Compiler modules log
skipped statements, generated reactions and rule registrations at DEBUG
level, and per-node detail (species accumulation, rate rewrites) at
``EXTENDED_DEBUG``. Messages about one network are prefixed with its name::

    [binding] Extracted 2 reactions, 3 species

The log level defaults to WARNING and can be overridden with the
``PYRN_LOG`` environment variable, set to an integer or a level name
(e.g. ``PYRN_LOG=EXTENDED_DEBUG``).
"""

import logging
import os
import warnings

LOG_LEVEL_ENV_VAR = 'PYRN_LOG'
BASE_LOGGER_NAME = 'pyrn'
EXTENDED_DEBUG = 5
NAMED_LOG_LEVELS = {'NOTSET': logging.NOTSET,
                    'EXTENDED_DEBUG': EXTENDED_DEBUG,
                    'DEBUG': logging.DEBUG,
                    'INFO': logging.INFO,
                    'WARNING': logging.WARNING,
                    'ERROR': logging.ERROR,
                    'CRITICAL': logging.CRITICAL}

logging.addLevelName(EXTENDED_DEBUG, 'EXTENDED_DEBUG')


def _env_log_level(default):
    """Return the level set by PYRN_LOG, or ``default`` if unset."""
    if LOG_LEVEL_ENV_VAR not in os.environ:
        return default
    level_name = os.environ[LOG_LEVEL_ENV_VAR]
    try:
        return int(level_name)
    except ValueError:
        if level_name in NAMED_LOG_LEVELS:
            return NAMED_LOG_LEVELS[level_name]
        raise ValueError('Environment variable {} contains an '
                         'invalid value "{}". If set, its value must '
                         'be one of {} (case-sensitive) or an '
                         'integer log level.'.format(
                             LOG_LEVEL_ENV_VAR, level_name,
                             ", ".join(NAMED_LOG_LEVELS)))


def setup_logger(level=logging.WARNING, console_output=True):
    """
    Set up the ``pyrn`` base logger

    Replaces any handlers already attached to it. Typically,
    :func:`get_logger` should be used instead, which only calls this the
    first time a pyrn logger is requested.

    Parameters
    ----------
    level : int
        Logging level. Overridden by the PYRN_LOG environment variable, if
        set.
    console_output : bool
        Attach a stderr handler if True (default)

    Returns
    -------
    The ``pyrn`` logging.Logger
    """
    log = logging.getLogger(BASE_LOGGER_NAME)
    log.setLevel(_env_log_level(level))
    log.handlers = []
    if console_output:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s'))
        log.addHandler(handler)
    return log


def get_logger(logger_name=BASE_LOGGER_NAME, network=None, log_level=None,
               **kwargs):
    """
    Returns (if extant) or creates a pyrn logger

    Parameters
    ----------
    logger_name : string
        Logger namespace, typically ``__name__``
    network : pyrn.core.Network or str
        If given, log entries are prefixed with the network's name (or the
        string itself)
    log_level : bool or int
        Override the level of the requested logger. None or False keeps the
        current level, True means logging.DEBUG.
    **kwargs : kwargs
        Passed to :func:`setup_logger` if the pyrn logger hasn't been set up
        yet; ignored with a warning otherwise.

    Returns
    -------
    A logging.Logger, or a :class:`NetworkLoggerAdapter` if ``network`` is
    given

    Examples
    --------

    >>> from pyrn.logging import get_logger
    >>> logger = get_logger(__name__, network='binding')
    >>> logger.debug('Extracted %d reactions', 2)
    """
    if BASE_LOGGER_NAME not in logging.Logger.manager.loggerDict:
        setup_logger(**kwargs)
    elif kwargs:
        warnings.warn('pyrn logger already exists, ignoring keyword '
                      'arguments to setup_logger')

    logger = logging.getLogger(logger_name)

    if log_level is not None and log_level is not False:
        if isinstance(log_level, bool):
            log_level = logging.DEBUG
        elif not isinstance(log_level, int):
            raise ValueError('log_level must be a boolean, integer or None')
        logger.setLevel(log_level)

    if network is None:
        return logger
    return NetworkLoggerAdapter(logger, {'network': network})


class NetworkLoggerAdapter(logging.LoggerAdapter):
    """
    Prefix log entries with a network name

    Networks compiled without a name are logged as ``_anonymous_``.
    """
    def process(self, msg, kwargs):
        network = self.extra['network']
        name = getattr(network, 'name', network) or '_anonymous_'
        return '[%s] %s' % (name, msg), kwargs
