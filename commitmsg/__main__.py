import logging
import sys

from commitmsg.app import main


def run():
    try:
        main()
    except Exception as err:  # pylint: disable=broad-except
        logging.error('commit-msg: %s', err)
        if hasattr(err, 'stdout'):
            # pylint: disable=no-member
            logging.error('stdout was: %s', err.stdout)
        if hasattr(err, 'stderr'):
            # pylint: disable=no-member
            logging.error('stderr was: %s', err.stderr)
        logging.debug('Traceback:', exc_info=True)
        sys.exit(1)


if __name__ == '__main__':
    run()
