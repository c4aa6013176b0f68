"""
Example of using logglysend with Python's standard logging module.
"""

import logging

from logglysend import LogglyHandler


def main():
    handler = LogglyHandler(
        token="your-customer-token",  # Required!
        tags=["my-project"],
        extra_fields={"environment": "development"},
    )

    logger = logging.getLogger("my_app")
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)

    try:
        # Use standard logging API
        logger.debug("Debug message")
        logger.info("Info message with extra", extra={"user_id": 42})
        logger.warning("Warning message", extra={"tags": ["disk"]})
        logger.error("Error message")

        try:
            raise ValueError("Something went wrong!")
        except ValueError:
            logger.exception("Caught an exception")

    finally:
        handler.close()


if __name__ == "__main__":
    main()
