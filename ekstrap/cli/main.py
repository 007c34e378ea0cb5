"""CLI entry point for ekstrap."""

from __future__ import annotations

import logging
import os
import sys
import warnings

import fire
from botocore.exceptions import ClientError, NoCredentialsError

from ekstrap.constants import EXIT_CONFIG_ERROR, EXIT_ERROR
from ekstrap.exceptions import FetchError, MalformedRowWarning, MetadataError, ParseError
from ekstrap.logging import StreamFormatter, StreamRoutingFilter
from ekstrap.utils import get_aws_credentials_error_message


def get_ekstrap_class() -> type:
    """Get Ekstrap class on-demand to avoid circular imports.

    Returns
    -------
    type
        Ekstrap command class
    """
    from ekstrap.__main__ import Ekstrap

    return Ekstrap


def handle_fetch_error(error: FetchError, debug_mode: bool) -> None:
    """Handle a failed HTTP request.

    Covers both the table sources fetched by ``generate`` and the instance
    metadata service queried by ``node``.

    Parameters
    ----------
    error : FetchError
        The fetch error that was raised
    debug_mode : bool
        Whether debug mode is enabled

    Raises
    ------
    FetchError
        Re-raised if debug mode is enabled
    """
    if debug_mode:
        raise

    print(f"Request failed: {error}\n", file=sys.stderr)

    if isinstance(error, MetadataError):
        print("This usually means:", file=sys.stderr)
        print("  - The command is not running on an EC2 instance", file=sys.stderr)
        print("  - The metadata service is disabled or requires IMDSv2 only\n", file=sys.stderr)
    elif error.status_code is None:
        print("Check network access to the host.\n", file=sys.stderr)

    print(f"URL: {error.url}", file=sys.stderr)
    sys.exit(EXIT_ERROR)


def handle_parse_error(error: ParseError, debug_mode: bool) -> None:
    """Handle a source document with unexpected structure.

    Parameters
    ----------
    error : ParseError
        The parse error that was raised
    debug_mode : bool
        Whether debug mode is enabled

    Raises
    ------
    ParseError
        Re-raised if debug mode is enabled
    """
    if debug_mode:
        raise

    print(f"Unexpected source format: {error}\n", file=sys.stderr)
    print("The documentation page or price list layout may have changed.", file=sys.stderr)
    print("Nothing was written.", file=sys.stderr)
    sys.exit(EXIT_ERROR)


def handle_credentials_error(debug_mode: bool) -> None:
    """Handle missing AWS credentials.

    Parameters
    ----------
    debug_mode : bool
        Whether debug mode is enabled

    Raises
    ------
    NoCredentialsError
        Re-raised if debug mode is enabled
    """
    if debug_mode:
        raise

    print(get_aws_credentials_error_message(), file=sys.stderr)
    sys.exit(EXIT_ERROR)


def handle_api_error(error: ClientError, debug_mode: bool) -> None:
    """Handle an AWS API error with context-specific messages.

    Parameters
    ----------
    error : ClientError
        The API error that was raised
    debug_mode : bool
        Whether debug mode is enabled

    Raises
    ------
    ClientError
        Re-raised if debug mode is enabled
    """
    if debug_mode:
        raise

    error_code = error.response.get("Error", {}).get("Code", "")

    if error_code in ["UnauthorizedOperation", "AccessDenied", "AccessDeniedException"]:
        print("Insufficient IAM permissions\n", file=sys.stderr)
        print("The node role needs ec2:DescribeInstances to read instance tags.", file=sys.stderr)
    elif error_code in ["ExpiredToken", "RequestExpired", "ExpiredTokenException"]:
        print("AWS credentials have expired\n", file=sys.stderr)
        print("Refresh your credentials and try again.", file=sys.stderr)
    else:
        print(f"AWS API error: {error}", file=sys.stderr)

    sys.exit(EXIT_ERROR)


def handle_value_error(error: ValueError, debug_mode: bool) -> None:
    """Handle an invalid configuration value.

    Parameters
    ----------
    error : ValueError
        The value error that was raised
    debug_mode : bool
        Whether debug mode is enabled

    Raises
    ------
    ValueError
        Re-raised if debug mode is enabled
    """
    if debug_mode:
        raise

    print(f"Configuration error: {error}", file=sys.stderr)
    sys.exit(EXIT_CONFIG_ERROR)


def handle_runtime_error(error: Exception, debug_mode: bool) -> None:
    """Handle any other expected failure.

    Parameters
    ----------
    error : Exception
        The runtime, OS or lookup error that was raised
    debug_mode : bool
        Whether debug mode is enabled

    Raises
    ------
    Exception
        Re-raised if debug mode is enabled
    """
    if debug_mode:
        raise

    print(f"Unexpected error: {error}", file=sys.stderr)
    sys.exit(EXIT_ERROR)


def configure_logging(debug_mode: bool) -> None:
    """Route INFO to stdout and WARNING and above to stderr."""
    stdout_handler = logging.StreamHandler(sys.stdout)
    stdout_handler.setFormatter(StreamFormatter("%(message)s"))
    stdout_handler.addFilter(StreamRoutingFilter("stdout"))

    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setFormatter(StreamFormatter("%(message)s"))
    stderr_handler.addFilter(StreamRoutingFilter("stderr"))

    logging.basicConfig(
        level=logging.DEBUG if debug_mode else logging.INFO,
        handlers=[stdout_handler, stderr_handler],
    )

    for boto_module in ["botocore", "boto3", "urllib3"]:
        logging.getLogger(boto_module).setLevel(logging.WARNING)

    if not debug_mode:
        warnings.simplefilter("ignore", MalformedRowWarning)


def main() -> None:
    """Entry point for Fire CLI with graceful error handling.

    Fire maps the Ekstrap class methods to subcommands (``generate``,
    ``capacity``, ``node``). Setting ``EKSTRAP_DEBUG=1`` enables debug logging
    and lets exceptions propagate with their tracebacks.
    """
    debug_mode = os.environ.get("EKSTRAP_DEBUG") == "1"
    configure_logging(debug_mode)

    try:
        fire.Fire(get_ekstrap_class()())
    except FetchError as e:
        handle_fetch_error(e, debug_mode)
    except ParseError as e:
        handle_parse_error(e, debug_mode)
    except NoCredentialsError:
        handle_credentials_error(debug_mode)
    except ClientError as e:
        handle_api_error(e, debug_mode)
    except ValueError as e:
        handle_value_error(e, debug_mode)
    except (RuntimeError, OSError, KeyError) as e:
        handle_runtime_error(e, debug_mode)
