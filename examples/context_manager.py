"""
Example of using LogglyClient as a context manager.
"""

from logglysend import LogglyClient, load_config


def main():
    # LOGGLY_TOKEN, LOGGLY_TAGS, ... are read from the environment
    config = load_config()

    # Using context manager ensures in-flight events finish
    with LogglyClient.from_config(config) as client:
        client.log_message("Application started")

        for i in range(20):
            if i % 5 == 0:
                client.log_message(f"Checkpoint {i}", tags=["checkpoint"])
            client.log_record({"step": "processing", "item_id": i})

        client.log_message("Application finished successfully")

    print("Done! Events have been handed to Loggly.")


if __name__ == "__main__":
    main()
