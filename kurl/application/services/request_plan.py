# application/services/request_plan.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from kurl.application.ports.http_transport import HopRequest
from kurl.application.ports.logger import LoggerPort
from kurl.domain.config import RequestConfig
from kurl.domain.headers import HeaderSet
from kurl.domain.hop import DEFAULT_REDIRECT_POLICY, HopState, RedirectPolicy

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


@dataclass(frozen=True)
class RequestBody:
    payload: bytes
    form: bool


@dataclass(frozen=True)
class RequestPlan:
    """
    Method and body decisions for every hop of one exchange.

    - hop 0: HEAD when head_only, GET promoted to POST when a body is given,
      otherwise the configured method
    - body and the form Content-Type default only ride along on a POST
    - hop >= 1: policy method (GET), no body
    """

    initial_url: str
    initial_method: str
    headers: HeaderSet
    body: Optional[RequestBody] = None
    policy: RedirectPolicy = DEFAULT_REDIRECT_POLICY

    @classmethod
    def from_config(
        cls,
        config: RequestConfig,
        headers: HeaderSet,
        initial_url: str,
        logger: Optional[LoggerPort] = None,
        policy: RedirectPolicy = DEFAULT_REDIRECT_POLICY,
    ) -> "RequestPlan":
        method = initial_method(config)

        body: Optional[RequestBody] = None
        if config.has_body and not config.head_only:
            if method == "POST":
                if config.data is not None:
                    body = RequestBody(payload=config.data.encode("utf-8"), form=True)
                else:
                    body = RequestBody(payload=(config.data_raw or "").encode("utf-8"), form=False)
            elif logger is not None:
                logger.warning("request.body_ignored", method=method)

        return cls(
            initial_url=initial_url,
            initial_method=method,
            headers=headers,
            body=body,
            policy=policy,
        )

    def initial_state(self) -> HopState:
        return HopState(url=self.initial_url, hop=0, method=self.initial_method)

    def request_for(self, state: HopState) -> HopRequest:
        if state.hop > 0 or self.body is None:
            return HopRequest(method=state.method, url=state.url, headers=self.headers)

        headers = self.headers
        if self.body.form and "Content-Type" not in headers:
            headers = headers.copy()
            headers.add("Content-Type", FORM_CONTENT_TYPE)
        return HopRequest(method=state.method, url=state.url, headers=headers, body=self.body.payload)


def initial_method(config: RequestConfig) -> str:
    if config.head_only:
        return "HEAD"
    if config.has_body and config.method == "GET":
        return "POST"
    return config.method
