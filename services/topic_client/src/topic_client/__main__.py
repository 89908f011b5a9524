"""Console client: stream research topic suggestions from the relay to stdout."""
import argparse
import asyncio
import sys
from contextlib import aclosing

from topic_shared.logging import configure_logging
from topic_shared.schemas import AcademicLevel

from topic_client.config import TopicClientSettings
from topic_client.errors import TopicClientError
from topic_client.presenter import build_request, collect_topics, describe_error
from topic_client.stream_consumer import RelayClient

LEVELS = {"masters": AcademicLevel.MASTERS, "phd": AcademicLevel.PHD}


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="topic_client",
        description="Request research topic suggestions and print them as they stream in.",
    )
    parser.add_argument("--keywords", required=True, help="comma or newline separated keywords")
    parser.add_argument("--field", required=True, dest="field_of_study", help="field of study")
    parser.add_argument("--level", choices=sorted(LEVELS), default="masters")
    parser.add_argument("--relay-url", default=None, help="overrides TOPIC_CLIENT_RELAY_URL")
    return parser.parse_args(argv)


def _write(text: str) -> None:
    sys.stdout.write(text)
    sys.stdout.flush()


async def run(args: argparse.Namespace, client: RelayClient) -> int:
    try:
        request = build_request(args.keywords, args.field_of_study, LEVELS[args.level])
        async with aclosing(client.stream_topics(request)) as chunks:
            await collect_topics(chunks, on_text=_write)
    except TopicClientError as e:
        print(describe_error(e), file=sys.stderr)
        return 1
    _write("\n")
    return 0


def main(argv: list[str] | None = None) -> int:
    settings = TopicClientSettings()
    configure_logging(json_logs=settings.json_logs)
    args = parse_args(argv)
    client = RelayClient(args.relay_url or settings.relay_url, timeout=settings.timeout_seconds)
    return asyncio.run(run(args, client))


if __name__ == "__main__":
    sys.exit(main())
