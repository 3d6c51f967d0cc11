# application/executor/redirect_engine.py
from __future__ import annotations

from typing import Optional

from kurl.application.outcome import ExchangeOutcome
from kurl.application.output_router import OutputRouter
from kurl.application.ports.http_transport import HttpTransportPort, ResponseSnapshot
from kurl.application.ports.logger import LoggerPort
from kurl.application.services.redactor import mask_pairs
from kurl.application.services.request_plan import RequestPlan
from kurl.domain.diagnostic import Diagnostic, DiagnosticKind
from kurl.domain.exceptions import TransportFailure
from kurl.domain.hop import Phase
from kurl.infrastructure.url.url_resolver import UrlResolver


class RedirectEngine:
    """
    Runs one exchange: a request per hop, following 3xx Location headers
    when asked to, until a hop has no usable redirect or the hop limit is hit.

    Transport problems never escape as exceptions; they end the run with a
    failed ExchangeOutcome carrying the classified Diagnostic.
    """

    def __init__(
        self,
        transport: HttpTransportPort,
        router: OutputRouter,
        logger: LoggerPort,
        follow_redirects: bool = False,
        head_only: bool = False,
        url_resolver: Optional[UrlResolver] = None,
    ):
        self._transport = transport
        self._router = router
        self._logger = logger
        self._follow = follow_redirects
        self._head_only = head_only
        self._urls = url_resolver or UrlResolver()

    def run(self, plan: RequestPlan) -> ExchangeOutcome:
        state = plan.initial_state()
        sent = 0

        self._logger.info(
            "exchange.start",
            method=state.method,
            url=state.url,
            follow_redirects=self._follow,
            head_only=self._head_only,
        )

        while True:
            log = self._logger.bind(hop=state.hop)
            self._transition(log, Phase.SENDING)

            try:
                built = self._transport.build(plan.request_for(state))
                self._router.on_request(built)
                log.debug(
                    "hop.request",
                    method=built.method,
                    url=built.url,
                    headers=mask_pairs(built.headers),
                    body_len=len(built.body) if built.body else 0,
                )
                self._transition(log, Phase.AWAITING_RESPONSE)
                response = self._transport.send(built, read_body=not self._head_only)
            except TransportFailure as e:
                return self._fail(log, e.diagnostic, sent)

            sent += 1
            self._log_response(log, response)
            self._transition(log, Phase.DECIDING)

            next_url = self._next_url(response)
            if not self._follow or next_url is None:
                self._router.on_response(response, final=True)
                self._transition(log, Phase.DONE)
                return ExchangeOutcome(
                    ok=True,
                    requests_sent=sent,
                    final_status=response.status,
                    final_url=response.url,
                )

            if state.hop >= plan.policy.max_hops:
                self._router.on_response(response, final=True)
                return self._fail(
                    log,
                    Diagnostic(
                        kind=DiagnosticKind.REDIRECT_LOOP,
                        url=state.url,
                        detail=f"Maximum ({plan.policy.max_hops}) redirects followed",
                    ),
                    sent,
                )

            self._router.on_response(response, final=False)
            self._router.on_hop_boundary()
            log.info(
                "hop.redirect",
                status=response.status,
                location=response.header("Location"),
                next_url=next_url,
            )
            state = state.advance(next_url, plan.policy)

    def _next_url(self, response: ResponseSnapshot) -> Optional[str]:
        if not response.is_redirect:
            return None
        return self._urls.resolve_location(response.url, response.header("Location"))

    def _log_response(self, log: LoggerPort, response: ResponseSnapshot) -> None:
        log.info(
            "hop.response",
            message=f"Request completed in {response.elapsed_ms} ms",
            status=response.status,
            url=response.url,
            elapsed_ms=response.elapsed_ms,
            headers=mask_pairs(response.headers),
        )
        if response.status >= 400:
            log.warning(
                "request.failed_status",
                message=f"Request failed with status: {response.status_line}",
                status=response.status,
                url=response.url,
            )

    def _fail(self, log: LoggerPort, diagnostic: Diagnostic, sent: int) -> ExchangeOutcome:
        self._transition(log, Phase.FAILED)
        log.info(
            "exchange.failed",
            kind=diagnostic.kind.value,
            url=diagnostic.url,
            detail=diagnostic.detail,
        )
        return ExchangeOutcome(ok=False, requests_sent=sent, diagnostic=diagnostic)

    def _transition(self, log: LoggerPort, phase: Phase) -> None:
        log.debug("hop.phase", phase=phase.value)
