"""Default readiness and liveness probes."""

from wpspawn.models.kube import HTTPGetAction, HTTPHeader, Probe
from wpspawn.models.site import Site


INTERNAL_HTTP_PORT = 8080
METRICS_EXPORTER_PORT = 9145
LIVENESS_PATH = "/-/php-ping"

PROBE_TIMINGS = dict(
    failure_threshold=3,
    initial_delay_seconds=10,
    period_seconds=5,
    success_threshold=1,
    timeout_seconds=30,
)


def readiness_probe(site: Site) -> Probe:
    """The site's readiness probe, or an HTTP check on ``/``.

    The default check sends an explicit Host header. Without it the request
    goes to the pod IP, and a site that is not installed yet redirects to its
    first route, which the kubelet would follow to an address it may not
    reach.
    """
    if site.spec.readiness_probe is not None:
        return site.spec.readiness_probe

    return Probe(
        http_get=HTTPGetAction(
            path="/",
            port=INTERNAL_HTTP_PORT,
            http_headers=[HTTPHeader(name="Host", value=site.main_domain)],
        ),
        **PROBE_TIMINGS,
    )


def liveness_probe(site: Site) -> Probe:
    if site.spec.liveness_probe is not None:
        return site.spec.liveness_probe

    return Probe(
        http_get=HTTPGetAction(path=LIVENESS_PATH, port=INTERNAL_HTTP_PORT),
        **PROBE_TIMINGS,
    )
