"""gettextengine Quickstart - Textdomains, Region Fallback and Plurals.

Demonstrates the everyday workflow:

1. Create a registry and pick a locale
2. Bind a textdomain to its catalogs
3. Resolve once, then translate synchronously
4. Inspect what the resolver tried

Catalogs are supplied from memory so the example runs anywhere. Real
applications bind a directory or URL holding compiled .mo files instead:

    gtx.bindtextdomain("/usr/share/locale")

Python 3.13+.
"""

from __future__ import annotations

import asyncio
import logging

from gettextengine import EngineConfig, N_, TextdomainRegistry

# Region catalog: only the messages that differ in Austria.
CATALOGS = {
    "de": {
        "LC_MESSAGES": {
            "shop": {
                "entries": {
                    "": ["Plural-Forms: nplurals=2; plural=(n != 1);\n"],
                    "Cart": ["Warenkorb"],
                    "January": ["Januar"],
                    "One item in your cart.": [
                        "Ein Artikel im Warenkorb.",
                        "{count} Artikel im Warenkorb.",
                    ],
                    "Hello, {name}!": ["Hallo, {name}!"],
                    "menu\x04Open": ["Öffnen"],
                }
            }
        }
    },
    "de_AT": {
        "LC_MESSAGES": {
            "shop": {"entries": {"January": ["Jänner"]}},
        }
    },
}

MONTHS = [N_("January")]


def example_1_region_fallback(registry: TextdomainRegistry) -> None:
    """Example 1: de_AT overrides single messages, the rest comes from de."""
    print("=" * 60)
    print("Example 1: Region Fallback (de_AT -> de)")
    print("=" * 60)

    gtx = registry.textdomain("shop")
    print(f"  Cart:    {gtx._('Cart')}")
    print(f"  January: {gtx._(MONTHS[0])}")
    print(f"  Missing: {gtx._('Checkout')}")


def example_2_plurals_and_placeholders(registry: TextdomainRegistry) -> None:
    """Example 2: Plural selection with {placeholder} expansion."""
    print("\n" + "=" * 60)
    print("Example 2: Plurals and Placeholders")
    print("=" * 60)

    gtx = registry.textdomain("shop")
    for count in (1, 2, 5):
        text = gtx._nx(
            "One item in your cart.",
            "{count} items in your cart.",
            count,
            {"count": count},
        )
        print(f"  {count}: {text}")

    print(f"  {gtx._x('Hello, {name}!', {'name': 'Anna'})}")
    print(f"  {gtx._p('menu', 'Open')}")


def example_3_diagnostics(registry: TextdomainRegistry) -> None:
    """Example 3: What did the resolver try?"""
    print("\n" + "=" * 60)
    print("Example 3: Load Diagnostics")
    print("=" * 60)

    summary = registry.resolver.get_load_summary()
    print(f"  {summary!r}")
    for result in summary.results:
        print(f"  {result.status:<9} {result.source}")


async def main() -> None:
    """Run all examples."""
    registry = TextdomainRegistry(EngineConfig(default_base_path="locale"))
    registry.user_locales(["de-AT", "en"])
    registry.locale = registry.select_locale(["de_DE", "de_AT", "fr"], ["de_AT"])

    gtx = registry.textdomain("shop")
    gtx.bindtextdomain(CATALOGS)
    await gtx.resolve()

    example_1_region_fallback(registry)
    example_2_plurals_and_placeholders(registry)
    example_3_diagnostics(registry)


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    asyncio.run(main())
