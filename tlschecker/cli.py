"""
TLS Checker - command line interface
"""
import argparse
import logging
import sys
from enum import IntEnum
from typing import List, Optional, TextIO

from tlschecker._client import check_domain
from tlschecker._errors import CheckError
from tlschecker._models import TlsStatus

logger = logging.getLogger(__name__)


class ExitCode(IntEnum):
    """Process exit codes, one per failure stage"""
    OK = 0
    PARSE_FLAG_ERROR = 1
    MISSING_DOMAIN = 2
    CHECK_FAILED = 3


class _FlagParseError(Exception):
    pass


class _FlagParser(argparse.ArgumentParser):
    """ArgumentParser that reports to a given stream and never exits"""

    def __init__(self, err_stream: TextIO, **kwargs):
        super().__init__(**kwargs)
        self.err_stream = err_stream

    def print_usage(self, file=None):
        super().print_usage(file or self.err_stream)

    def print_help(self, file=None):
        super().print_help(file or self.err_stream)

    def exit(self, status=0, message=None):
        if message:
            self.err_stream.write(message)
        raise _FlagParseError(status)

    def error(self, message):
        self.print_usage()
        self.exit(2, f"{self.prog}: error: {message}\n")


class CLI:  # pylint: disable=too-few-public-methods
    """Runs one check and writes the report to the given streams"""

    def __init__(self, out_stream: TextIO, err_stream: TextIO):
        self.out_stream = out_stream
        self.err_stream = err_stream

    def run(self, args: List[str]) -> int:
        """
        Run the checker.

        Args:
            args: Full argument vector, program name first (like sys.argv)

        Returns:
            An ExitCode value
        """
        parser = _FlagParser(self.err_stream, prog="tls-checker",
                             allow_abbrev=False)
        parser.add_argument("--domain", "-domain", default="",
                            help="check domain")
        try:
            options = parser.parse_args(args[1:])
        except _FlagParseError:
            return ExitCode.PARSE_FLAG_ERROR

        domain = options.domain
        if not domain:
            self.err_stream.write("Need Domain\n")
            return ExitCode.MISSING_DOMAIN

        self.out_stream.write(f"Domain: {domain}\n")
        try:
            result = check_domain(domain)
        except CheckError as e:
            logger.debug("Check of %s failed", domain, exc_info=True)
            self.err_stream.write(f"{e}\n")
            return ExitCode.CHECK_FAILED

        self.report(result)
        return ExitCode.OK

    def report(self, result: TlsStatus) -> None:
        """Write the negotiated cipher suites, one per line"""
        self.out_stream.write("CipherSuites:\n")
        for cipher_suite in result.ssl_config.cipher_suites:
            self.out_stream.write(f"  - {cipher_suite}\n")


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point"""
    logging.basicConfig(
        level=logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    cli = CLI(out_stream=sys.stdout, err_stream=sys.stderr)
    return int(cli.run(sys.argv if argv is None else argv))


if __name__ == "__main__":
    sys.exit(main())
