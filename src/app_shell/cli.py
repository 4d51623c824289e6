import argparse
import logging
import sys
from pathlib import Path

from src.app_shell.config import build_loader, validate_catalog_rules
from src.components.emission import TargetSyntax
from src.components.identifiers import generate
from src.components.pipeline import GenerateInput, VerifyInput, run_generate, run_verify
from src.components.resolver import create_resolver
from src.core.entities import (
    AppearanceContext,
    BundleIdentity,
    Category,
    ColorValue,
    ImageValue,
    ResourceManifestEntry,
)
from src.core.errors import AssetSymbolsError
from src.rules.loader import load_rules
from src.rules.models import Rules

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("cli")

RULES_PATH = "rules.yaml"


def get_rules(path: str) -> Rules:
    rules_path = Path(path)
    if not rules_path.exists():
        logger.error(f"Rules file {rules_path} not found.")
        sys.exit(1)

    try:
        return load_rules(rules_path)
    except ValueError as e:
        logger.error(str(e))
        sys.exit(1)


def handle_generate(rules: Rules, args: argparse.Namespace) -> int:
    base_dir = Path(args.rules).resolve().parent
    source = Path(args.source)

    for problem in validate_catalog_rules(rules, base_dir):
        logger.warning(problem)

    output = args.out or rules.emission.output_path
    inp = GenerateInput(
        source=source,
        target=TargetSyntax(args.target) if args.target else None,
        output_path=Path(output) if output else None,
        bundle_id=args.bundle_id,
        verify=False if args.no_verify else None,
    )
    result = run_generate(inp, rules, build_loader(rules, base_dir, source, args.bundle_id))

    if not result.success:
        for error in result.errors:
            logger.error(f"[{error.code}] {error.message}")
        return 1

    if result.output_path is None:
        sys.stdout.write(result.text or "")
    else:
        print(f"Generated {len(result.constants)} symbols -> {result.output_path}")
    return 0


def handle_verify(rules: Rules, args: argparse.Namespace) -> int:
    base_dir = Path(args.rules).resolve().parent
    source = Path(args.source)

    inp = VerifyInput(source=source, bundle_id=args.bundle_id, strict=args.strict or None)
    result = run_verify(inp, rules, build_loader(rules, base_dir, source, args.bundle_id))

    for error in result.errors:
        logger.error(f"[{error.code}] {error.message}")
    if result.violations:
        print("Symbol/Bundle Violations Found:")
        for v in result.violations:
            print(f"  - {v}")
    if result.success:
        print("Symbol/Bundle Sync Check: PASS")
        return 0
    return 1


def describe(value: ColorValue | ImageValue | None) -> str:
    if isinstance(value, ColorValue):
        return f"{value.hex} ({value.color_space})"
    if isinstance(value, ImageValue):
        return ", ".join(value.filenames) or "(no files)"
    return "(system)"


def handle_resolve(rules: Rules, args: argparse.Namespace) -> int:
    base_dir = Path(args.rules).resolve().parent
    identity = BundleIdentity(args.bundle_id or rules.project.bundle_id)
    resolver = create_resolver(
        build_loader(rules, base_dir, bundle_id=identity.bundle_id),
        rules.resolver.to_config(),
    )

    try:
        constant = generate(
            ResourceManifestEntry(human_name=args.name, category=Category(args.category)),
            rules.identifiers.to_config(),
        )
        handle = resolver.resolve(
            constant,
            identity,
            AppearanceContext(appearance=args.appearance, high_contrast=args.high_contrast),
        )
    except AssetSymbolsError as e:
        logger.error(str(e))
        return 1

    print(f"{constant.symbol_name} -> {handle.name} [{handle.variant}] {describe(handle.value)}")
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Asset symbol generator")
    parser.add_argument("--rules", default=RULES_PATH, help="Path to rules.yaml")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # generate
    gen_parser = subparsers.add_parser("generate", help="Generate symbol source")
    gen_parser.add_argument("source", help="Manifest file or asset catalog directory")
    gen_parser.add_argument(
        "--target", choices=[t.value for t in TargetSyntax], help="Output syntax"
    )
    gen_parser.add_argument("--out", help="Output file (default: rules or stdout)")
    gen_parser.add_argument("--bundle-id", help="Override the project bundle id")
    gen_parser.add_argument(
        "--no-verify", action="store_true", help="Skip checking symbols against the bundle"
    )

    # verify
    verify_parser = subparsers.add_parser("verify", help="Check symbols against the bundle")
    verify_parser.add_argument("source", help="Manifest file or asset catalog directory")
    verify_parser.add_argument("--bundle-id", help="Override the project bundle id")
    verify_parser.add_argument(
        "--strict", action="store_true", help="Also fail on undeclared bundle entries"
    )

    # resolve
    resolve_parser = subparsers.add_parser("resolve", help="Resolve one resource")
    resolve_parser.add_argument("name", help="Resource name as stored in the bundle")
    resolve_parser.add_argument(
        "--category", choices=[c.value for c in Category], default=Category.COLOR.value
    )
    resolve_parser.add_argument("--appearance", choices=["light", "dark"])
    resolve_parser.add_argument("--high-contrast", action="store_true")
    resolve_parser.add_argument("--bundle-id", help="Override the project bundle id")

    args = parser.parse_args(argv)
    rules = get_rules(args.rules)

    if args.command == "generate":
        return handle_generate(rules, args)
    if args.command == "verify":
        return handle_verify(rules, args)
    if args.command == "resolve":
        return handle_resolve(rules, args)
    return 2


if __name__ == "__main__":
    sys.exit(main())
