"""Checker protocol and the injection point that drives one."""

from abc import ABC, abstractmethod
from typing import List, Optional
import random
import string

import httpx

from webvulns.core.injection_point import InjectionPoint


class BaseChecker(ABC):
    """Every checker must implement get_payloads() and check_response()."""

    name: str = "Unnamed Checker"

    # ── public API ──────────────────────────────────────────────

    @abstractmethod
    def get_payloads(self) -> List[str]:
        """Return the list of payloads to inject."""
        ...

    @abstractmethod
    def check_response(self, response: httpx.Response) -> bool:
        """True if *response* to an injected payload shows the vulnerability."""
        ...

    # ── shared helpers ──────────────────────────────────────────

    @staticmethod
    def rand(n: int = 8) -> str:
        """Random alphanumeric canary string."""
        abc = string.ascii_letters + string.digits
        return "".join(random.choice(abc) for _ in range(n))


class CheckerInjectionPoint(InjectionPoint):
    """
    Injection point whose predicate is a BaseChecker.

    Each payload is sent through exploit() until the checker accepts a
    response; that payload and response are kept for reporting.

        vulns = CheckerInjectionPoint.scan(url, checker=MyChecker())
    """

    def __init__(self, url, *, checker: BaseChecker, **kwargs):
        super().__init__(url, **kwargs)
        self.checker = checker
        self.payload: Optional[str] = None
        self.response: Optional[httpx.Response] = None

    def vulnerable(self) -> bool:
        for payload in self.checker.get_payloads():
            resp = self.exploit(payload)
            if self.logger and self.logger.verbose >= 2:
                self.logger.debug(
                    f"  {self.location} = {self.logger.PAY}{payload}  (HTTP {resp.status_code})")
            if self.checker.check_response(resp):
                self.payload = payload
                self.response = resp
                return True
        return False

    def __repr__(self):
        return f"<{self.checker.name} {self.url} {self.location} payload={self.payload!r}>"
