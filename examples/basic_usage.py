"""
Basic usage example for logglysend.
"""

from logglysend import LogglyClient


def on_complete(result):
    if result.ok:
        print(f"delivered: {result.value}")
    else:
        print(f"failed: {result.error!r}")


def main():
    # Create client with token and default tags
    client = LogglyClient(
        token="your-customer-token",   # Required!
        tags=["my-project", "development"],
        timeout=5.0,
    )

    try:
        # Fire-and-forget
        client.log_message("Application starting...")

        # Extra tags for a single event
        client.log_message("Configuration loaded", tags=["config"])

        # Structured record, sent verbatim
        client.log_record(
            {"event": "user_login", "user_id": 123, "username": "john"},
            tags=["auth"],
            on_complete=on_complete,
        )

        # Wait for one outcome explicitly
        future = client.log_record({"event": "payment_failed", "error_code": "TIMEOUT"})
        print(f"payment event ok: {future.result().ok}")

    finally:
        # Waits for in-flight events
        client.close()


if __name__ == "__main__":
    main()
