"""Caller address extraction for requests arriving through proxies."""

from fastapi import Request

UNKNOWN_CLIENT = "-"


def extract_client_ip(request: Request) -> str:
    """Best-effort caller address.

    Precedence: CF-Connecting-IP, X-Real-IP, first hop of X-Forwarded-For,
    then the socket peer. Returns "-" when none is available, which then
    fails IP validation like any other malformed input.
    """
    headers = request.headers

    cf_ip = headers.get("cf-connecting-ip")
    if cf_ip is not None:
        return cf_ip

    real_ip = headers.get("x-real-ip")
    if real_ip is not None:
        return real_ip

    forwarded_for = headers.get("x-forwarded-for")
    if forwarded_for is not None:
        return forwarded_for.split(",")[0].strip()

    if request.client and request.client.host:
        return request.client.host
    return UNKNOWN_CLIENT
