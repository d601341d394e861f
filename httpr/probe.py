"""Probe client: record the status sequence a server returns"""

from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

import httpx


@dataclass
class ProbeResult:
    """Outcome of a probe run, one entry per request"""
    url: str
    codes: List[Optional[int]] = field(default_factory=list)  # None on transport error
    errors: List[str] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.codes)

    @property
    def ok(self) -> bool:
        """Every request got a response"""
        return not self.errors

    def counts(self) -> Dict[Optional[int], int]:
        return dict(Counter(self.codes))

    def runs(self) -> List[Tuple[Optional[int], int]]:
        """Run-length encoding of the code sequence"""
        encoded: List[Tuple[Optional[int], int]] = []
        for code in self.codes:
            if encoded and encoded[-1][0] == code:
                encoded[-1] = (code, encoded[-1][1] + 1)
            else:
                encoded.append((code, 1))
        return encoded


def probe(
    url: str,
    count: int = 10,
    method: str = "GET",
    timeout: float = 5.0,
    transport: Optional[httpx.BaseTransport] = None,
) -> ProbeResult:
    """
    Issue count sequential requests and record each status code.

    Transport errors are recorded rather than raised, so a probe against a
    flaky or unreachable server still completes.
    """
    if count < 1:
        raise ValueError("count must be at least 1")

    result = ProbeResult(url=url)
    with httpx.Client(timeout=timeout, transport=transport) as client:
        for _ in range(count):
            try:
                response = client.request(method, url)
                result.codes.append(response.status_code)
            except httpx.RequestError as e:
                result.codes.append(None)
                result.errors.append(f"{type(e).__name__}: {e}")

    return result
