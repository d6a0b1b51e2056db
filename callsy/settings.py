import os


def get_timeout_from_env(name: str) -> float | None:
    timeout = os.environ.get(name)
    if not timeout:  # unset or empty: no timeout
        return None
    return float(timeout)


# Files
default_request_file = os.environ.get("CALLSY_REQUEST_FILE", "request.json")
default_output_file = os.environ.get("CALLSY_OUTPUT_FILE", "response.json")


# Transport
request_timeout = get_timeout_from_env("CALLSY_TIMEOUT")
verify_tls = bool(int(os.environ.get("CALLSY_VERIFY_TLS", 1)))


# Diagnostics
debug = bool(int(os.environ.get("CALLSY_DEBUG", 0)))
