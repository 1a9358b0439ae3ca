import os
import re
import shlex
import stat
import subprocess
import sys

import click
from loguru import logger

from cyimages.settings import settings

WORD_REGEX = re.compile(r'[A-Z]?[a-z]+|[A-Z]+(?![a-z])|\d+')


def configure_logging(level: str = None):
    logger.remove()
    logger.add(sys.stderr, level=(level or settings.LOG_LEVEL).upper(), format='{message}')


def camel_case(s: str) -> str:
    """
    lodash-style camelCase: words are runs of letters or digits, so 'browsernode16.5.0-chrome94'
    becomes 'browsernode1650Chrome94'
    """
    words = WORD_REGEX.findall(s)
    return ''.join(word.lower() if i == 0 else word.capitalize() for i, word in enumerate(words))


def write_file(path: str, text: str):
    with open(path, 'w', encoding=settings.ENCODING) as f:
        f.write(text.strip() + '\n')
    logger.info(f'Saved {path}')


def make_executable(path: str):
    # a+x
    mode = os.stat(path).st_mode
    os.chmod(path, mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)


def spawn(cmd: str, *args: str) -> subprocess.Popen:
    """
    Launch a child process and return immediately: the caller never waits on it
    """
    fullcmd = shlex.split(cmd) + list(args)
    logger.debug(f'Launching {" ".join(shlex.quote(a) for a in fullcmd)}')
    return subprocess.Popen(fullcmd)


# unknown options and surplus positionals are ignored rather than rejected with a usage error
EXTRA_ARGS_SETTINGS = dict(ignore_unknown_options=True, allow_extra_args=True)


def warn_ignored_args():
    ctx = click.get_current_context()
    if ctx.args:
        logger.warning(f'Ignoring extra arguments: {" ".join(ctx.args)}')
