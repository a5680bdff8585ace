"""
Liveness helper. The service owns no backing store, so there is no
readiness probe: every dependency is supplied per request.
"""


def liveness_check() -> tuple[bool, list[str]]:
    """
    Lightweight liveness probe, just confirms the Python process is responsive.
    No I/O.  Returns (ok, list of failure messages).
    """
    return (True, [])
