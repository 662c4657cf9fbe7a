import sys

from colorama import Fore, Style


def report(message, stream=None):
    print(message, file=stream or sys.stderr)


def report_error(message, stream=None, colour=True):
    label = f"{Fore.RED}{Style.BRIGHT}ERROR{Style.RESET_ALL}" if colour else "ERROR"
    report(f"{label} {message}", stream)


def report_error_and_exit(message, code=1, stream=None, colour=True):
    report_error(f"{message} -- exiting", stream, colour)
    sys.exit(code)