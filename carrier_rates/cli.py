"""
carrier-rates command line

Quote a rate request stored as JSON against the configured carriers:

    python -m carrier_rates quote request.json             # shop every carrier
    python -m carrier_rates quote request.json --carrier UPS

Credentials come from UPS_* environment variables (or .env).
"""
import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from carrier_rates.core.config import Settings, load_ups_config
from carrier_rates.core.exceptions import CarrierError
from carrier_rates.core.http_client import HttpxTransport
from carrier_rates.modules.shipping.carriers import CarrierRegistry, UPSCarrier
from carrier_rates.schemas.enums import CarrierCode
from carrier_rates.schemas.shipping import RateResponse
from carrier_rates.services.rate_service import RateService

logger = logging.getLogger(__name__)


def format_response(response: RateResponse) -> str:
    lines = []
    for quote in response.quotes:
        line = (
            f"{quote.carrier.value:<6} {quote.service_name:<28} "
            f"{quote.total_charges.amount:>10.2f} {quote.total_charges.currency}"
        )
        if quote.guaranteed_delivery:
            line += f"  ({quote.guaranteed_delivery.business_days} business day(s))"
        lines.append(line)
    if not response.quotes:
        lines.append("No quotes returned")
    for warning in response.warnings or []:
        lines.append(f"warning: {warning}")
    return "\n".join(lines)


async def quote(request_path: Path, carrier: Optional[CarrierCode]) -> int:
    request = json.loads(request_path.read_text(encoding="utf-8"))

    async with HttpxTransport() as transport:
        registry = CarrierRegistry()
        registry.register(UPSCarrier(load_ups_config(Settings()), transport=transport))
        service = RateService(registry)

        try:
            if carrier is not None:
                response = await service.get_rates(carrier, request)
            else:
                response = await service.shop_rates(request)
        except CarrierError as e:
            logger.error(f"Rating failed: {e.code.value} - {e.message}")
            print(json.dumps(e.to_dict(), indent=2, default=str), file=sys.stderr)
            return 1

    print(format_response(response))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="carrier-rates", description=__doc__.splitlines()[1])
    subparsers = parser.add_subparsers(dest="command", required=True)

    quote_parser = subparsers.add_parser("quote", help="Quote a JSON rate request")
    quote_parser.add_argument("request", type=Path, help="Path to a RateRequest JSON file")
    quote_parser.add_argument(
        "--carrier",
        type=str.upper,
        choices=[code.value for code in CarrierCode],
        help="Rate a single carrier instead of shopping all of them",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    try:
        carrier = CarrierCode(args.carrier) if args.carrier else None
        return asyncio.run(quote(args.request, carrier))
    except (ValueError, OSError) as e:
        logger.error(f"Configuration or request file error: {e}")
        return 2


if __name__ == "__main__":
    sys.exit(main())
