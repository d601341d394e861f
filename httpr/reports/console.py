"""Console output for httpr"""

from httpr.config.schema import HttprConfig
from httpr.probe import ProbeResult


# ANSI color codes
GREEN = "\033[92m"
RED = "\033[91m"
YELLOW = "\033[93m"
RESET = "\033[0m"


def format_banner(config: HttprConfig) -> str:
    """
    Startup summary, at most 4 lines:
    1. Listen address
    2. Default response behavior
    3. Failure cycle (if enabled)
    4. Request log destination
    """
    response = config.response
    lines = [f"httpr listening on {config.listen}"]

    extras = []
    if response.delay_ms:
        extras.append(f"delay {response.delay_ms}ms")
    if response.echo:
        extras.append("echo")
    suffix = f" ({', '.join(extras)})" if extras else ""
    lines.append(f"  Default response: {response.code}{suffix}")

    fm = config.failure_mode
    if fm.enabled:
        if fm.is_degenerate:
            lines.append(f"  {YELLOW}Failure cycle: enabled with empty phases{RESET}")
        else:
            lines.append(
                f"  Failure cycle: {fm.failure_count} x {fm.failure_code}, "
                f"then {fm.success_count} x {fm.success_code}"
            )

    log = config.logging
    fmt = "pretty JSON" if log.pretty else ("JSON" if log.json_format else "raw")
    lines.append(f"  Request log: {fmt} -> {log.output or 'stdout'}")

    return "\n".join(lines)


def format_probe_summary(result: ProbeResult) -> str:
    """Status line, run-length sequence, and any transport errors"""
    if result.ok:
        status = f"{GREEN}✓{RESET}"
    else:
        status = f"{RED}✗{RESET}"

    lines = [f"{status} Probed {result.url}: {result.total} requests"]

    runs = ", ".join(f"{code if code is not None else 'error'} x{n}" for code, n in result.runs())
    lines.append(f"  Sequence: {runs}")

    if result.errors:
        lines.append(f"  {YELLOW}Errors: {len(result.errors)} (first: {result.errors[0]}){RESET}")

    return "\n".join(lines)


def print_banner(config: HttprConfig) -> None:
    print(format_banner(config))


def print_probe_summary(result: ProbeResult) -> None:
    print(format_probe_summary(result))
