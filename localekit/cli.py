#!/usr/bin/env python3
"""
localekit - Localization file toolkit CLI

Every command prints a JSON document on stdout, so results can be piped
into other tools or consumed by CI scripts.

Supported Formats:
    - JSON, i18next JSON
    - YAML
    - RESX (.NET)
    - PO (gettext)
    - XLIFF 1.2 / 2.0
    - SRT, VTT (subtitles)
    - CSV
    - FTL (Fluent)
    - VB resource wrappers (read-only)

Commands:
    scan      - Find missing, orphan and empty keys per culture
    diff      - Compare two files
    check     - Validate files against rules (--ci exits 1 on violations)
    convert   - Convert files between formats
    generate  - Create target-culture files with placeholder values
    translate - Machine-translate missing entries
    watch     - Re-run scan or check when files change
    formats   - List supported formats

Example:
    localekit scan ./locales --base en --targets tr,de
    localekit check ./locales --base en --rules no-empty-values --ci
    localekit translate tr --from en --in ./locales --provider deepl -k $KEY
"""

import argparse
import json
import logging
import os
import sys
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Optional

from . import __version__
from .formats import create_default_registry
from .placeholders import DEFAULT_PLACEHOLDER_PATTERN
from .services import (
    PROVIDERS,
    CheckOptions,
    CheckService,
    ConvertOptions,
    ConvertService,
    DiffOptions,
    DiffService,
    GenerateOptions,
    GenerateService,
    ScanOptions,
    ScanService,
    TranslateOptions,
    TranslateService,
    WatchOptions,
    WatchService,
)

logger = logging.getLogger("localekit")


def parse_list(value: Optional[str]) -> list[str]:
    """Split a comma-separated option into trimmed, non-empty items."""
    if not value:
        return []
    return [item.strip() for item in value.split(',') if item.strip()]


def write_output(result: dict, output_path: Optional[str]) -> None:
    """Write a JSON report to a file when --output is given."""
    if not output_path:
        return
    directory = os.path.dirname(output_path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    with open(output_path, 'w', encoding='utf-8') as f:
        json.dump(result, f, indent=2, ensure_ascii=False)


def cmd_scan(args, registry) -> tuple[dict, int]:
    """Scan a directory for translation gaps."""
    options = ScanOptions(
        base_culture=args.base,
        target_cultures=parse_list(args.targets),
        recursive=args.recursive,
        ignore_patterns=parse_list(args.ignore),
        check_placeholders=args.check_placeholders,
        placeholder_pattern=args.placeholder_pattern,
    )
    report = ScanService(registry).scan(args.path, options)

    result = {"status": "ok", "command": "scan", "path": args.path, **report.to_dict()}
    if not report.results:
        result["message"] = f"No files found for base culture '{options.base_culture}'"
    return result, 0


def cmd_diff(args, registry) -> tuple[dict, int]:
    """Compare two localization files."""
    options = DiffOptions(
        check_placeholders=args.check_placeholders,
        placeholder_pattern=args.placeholder_pattern,
    )
    report = DiffService(registry).diff(args.first, args.second, options)
    return {"status": "ok", "command": "diff", **report.to_dict()}, 0


def cmd_check(args, registry) -> tuple[dict, int]:
    """Validate localization files against rules."""
    options = CheckOptions(
        rules=parse_list(args.rules),
        base_culture=args.base,
        recursive=args.recursive,
        placeholder_pattern=args.placeholder_pattern,
    )
    report = CheckService(registry).check(args.path, options)

    result = {
        "status": "ok" if not report.has_violations else "violations",
        "command": "check",
        "path": args.path,
        "rules": options.active_rules(),
        **report.to_dict(),
    }
    exit_code = 1 if args.ci and report.has_violations else 0
    return result, exit_code


def cmd_convert(args, registry) -> tuple[dict, int]:
    """Convert a file or directory to another format."""
    options = ConvertOptions(
        to_format=args.to,
        from_format=args.from_format,
        force=args.force,
        recursive=args.recursive,
        culture=args.culture,
    )
    service = ConvertService(registry)
    if os.path.isdir(args.source):
        results = service.convert_directory(args.source, args.destination, options)
    else:
        results = [service.convert(args.source, args.destination, options)]

    failed = [r for r in results if not r.success]
    return {
        "status": "ok" if not failed else "error",
        "command": "convert",
        "converted": len(results) - len(failed),
        "failed": len(failed),
        "results": [r.to_dict() for r in results],
    }, 1 if failed else 0


def cmd_generate(args, registry) -> tuple[dict, int]:
    """Generate target-culture files from base-culture files."""
    options = GenerateOptions(
        target_culture=args.target,
        base_culture=args.from_culture,
        use_empty_value=args.empty,
        overwrite_existing=args.overwrite,
        recursive=args.recursive,
    )
    if args.placeholder:
        options.placeholder_pattern = args.placeholder

    results = GenerateService(registry).generate(args.input, args.out, options)
    failed = [r for r in results if not r.success]
    return {
        "status": "ok" if not failed else "error",
        "command": "generate",
        "files": len(results),
        "keys_added": sum(r.keys_added for r in results),
        "keys_skipped": sum(r.keys_skipped for r in results),
        "results": [r.to_dict() for r in results],
    }, 1 if failed else 0


def wait_cancellable(future: Future, cancel_event: threading.Event):
    """
    Wait for a background job, turning Ctrl+C into a cooperative cancel.

    On the first interrupt the event is set and the job is awaited again,
    so in-flight requests finish and partial results are still returned.
    """
    try:
        return future.result()
    except KeyboardInterrupt:
        logger.warning("Interrupted, finishing in-flight requests...")
        cancel_event.set()
        return future.result()


def cmd_translate(args, registry) -> tuple[dict, int]:
    """Translate base-culture files into a target culture."""
    options = TranslateOptions(
        source_language=args.from_culture,
        target_language=args.target,
        provider=args.provider,
        api_key=args.api_key,
        api_endpoint=args.endpoint,
        model=args.model,
        overwrite_existing=args.overwrite,
        only_missing=args.only_missing,
        recursive=args.recursive,
        delay_between_calls=args.delay,
        degree_of_parallelism=args.parallel,
    )

    def report_progress(progress):
        logger.info("[%d/%d] %s", progress.current, progress.total, progress.key)

    cancel_event = threading.Event()
    service = TranslateService(registry)
    # The worker thread leaves the main thread free to receive Ctrl+C
    with ThreadPoolExecutor(max_workers=1) as executor:
        future = executor.submit(service.translate, args.input, args.out, options, report_progress, cancel_event)
        results = wait_cancellable(future, cancel_event)

    failed = [r for r in results if not r.success]
    cancelled = any(r.cancelled for r in results)
    status = "error" if failed else "cancelled" if cancelled else "ok"
    return {
        "status": status,
        "command": "translate",
        "provider": options.provider,
        "cancelled": cancelled,
        "translated": sum(r.translated_count for r in results),
        "skipped": sum(r.skipped_count for r in results),
        "failed": sum(r.failed_count for r in results),
        "results": [r.to_dict() for r in results],
    }, 1 if failed else 0


def cmd_watch(args, registry) -> tuple[dict, int]:
    """Watch a directory and print a report after each change."""
    options = WatchOptions(
        base_culture=args.base,
        target_cultures=parse_list(args.targets),
        mode=args.mode,
        recursive=args.recursive,
        debounce_ms=args.debounce,
    )

    def on_change(report):
        print(json.dumps({"status": "ok", "command": "watch", "mode": options.mode, **report.to_dict()},
                         indent=2, ensure_ascii=False), flush=True)

    def on_error(message):
        print(json.dumps({"status": "error", "command": "watch", "error": message}), file=sys.stderr, flush=True)

    stop = threading.Event()
    with WatchService(registry) as watcher:
        watcher.start(args.path, options, on_change, on_error)
        watcher.run_once()
        try:
            while not stop.wait(1.0):
                pass
        except KeyboardInterrupt:
            pass

    return {"status": "ok", "command": "watch", "message": "Watch stopped"}, 0


def cmd_formats(args, registry) -> tuple[dict, int]:
    """List supported formats."""
    return {
        "status": "ok",
        "formats": registry.list_formats(),
    }, 0


COMMANDS = {
    "scan": cmd_scan,
    "diff": cmd_diff,
    "check": cmd_check,
    "convert": cmd_convert,
    "generate": cmd_generate,
    "translate": cmd_translate,
    "watch": cmd_watch,
    "formats": cmd_formats,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="localekit",
        description="Multi-format localization file toolkit",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  localekit scan ./locales --base en
  localekit diff locales/en.json locales/tr.json
  localekit check ./locales --base en --ci
  localekit convert en.resx en.json --to json
  localekit generate tr --from en --in ./locales
  localekit translate tr --from en --in ./locales --provider google
        """,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="Increase log verbosity (-v, -vv)")

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # scan command
    scan_parser = subparsers.add_parser("scan", help="Find missing, orphan and empty keys")
    scan_parser.add_argument("path", help="File or directory to scan")
    scan_parser.add_argument("--base", "-b", default="en", help="Base culture (default: en)")
    scan_parser.add_argument("--targets", "-t", help="Target cultures, comma-separated (default: all others)")
    scan_parser.add_argument("--recursive", "-r", action=argparse.BooleanOptionalAction, default=True,
                             help="Scan subdirectories (default: on)")
    scan_parser.add_argument("--ignore", help="Skip files whose name contains any of these, comma-separated")
    scan_parser.add_argument("--check-placeholders", action=argparse.BooleanOptionalAction, default=True,
                             help="Report placeholder mismatches (default: on)")
    scan_parser.add_argument("--placeholder-pattern", default=DEFAULT_PLACEHOLDER_PATTERN,
                             help="Placeholder regex or preset name (default: {name} style)")
    scan_parser.add_argument("--output", "-o", help="Write the JSON report to a file")

    # diff command
    diff_parser = subparsers.add_parser("diff", help="Compare two files")
    diff_parser.add_argument("first", help="Reference file")
    diff_parser.add_argument("second", help="File compared against the reference")
    diff_parser.add_argument("--check-placeholders", action=argparse.BooleanOptionalAction, default=True,
                             help="Report placeholder mismatches (default: on)")
    diff_parser.add_argument("--placeholder-pattern", default=DEFAULT_PLACEHOLDER_PATTERN,
                             help="Placeholder regex or preset name")
    diff_parser.add_argument("--output", "-o", help="Write the JSON report to a file")

    # check command
    check_parser = subparsers.add_parser("check", help="Validate files against rules")
    check_parser.add_argument("path", help="File or directory to check")
    check_parser.add_argument("--rules", "-r", help="Rules to run, comma-separated (default: all)")
    check_parser.add_argument("--base", "-b", help="Base culture for orphan and placeholder rules")
    check_parser.add_argument("--recursive", action=argparse.BooleanOptionalAction, default=True,
                              help="Check subdirectories (default: on)")
    check_parser.add_argument("--placeholder-pattern", default=DEFAULT_PLACEHOLDER_PATTERN,
                              help="Placeholder regex or preset name")
    check_parser.add_argument("--ci", action="store_true", help="Exit with status 1 when violations are found")
    check_parser.add_argument("--output", "-o", help="Write the JSON report to a file")

    # convert command
    convert_parser = subparsers.add_parser("convert", help="Convert between formats")
    convert_parser.add_argument("source", help="Source file or directory")
    convert_parser.add_argument("destination", help="Destination file or directory")
    convert_parser.add_argument("--from", "-f", dest="from_format", help="Source format (default: by extension)")
    convert_parser.add_argument("--to", "-t", required=True, help="Target format id")
    convert_parser.add_argument("--recursive", "-r", action=argparse.BooleanOptionalAction, default=True,
                                help="Convert subdirectories (default: on)")
    convert_parser.add_argument("--force", action="store_true", help="Overwrite existing files")
    convert_parser.add_argument("--culture", "-c", help="Culture to stamp on converted files")

    # generate command
    generate_parser = subparsers.add_parser("generate", help="Create target-culture files")
    generate_parser.add_argument("target", help="Target culture (e.g. tr)")
    generate_parser.add_argument("--from", "-f", dest="from_culture", default="en", help="Base culture (default: en)")
    generate_parser.add_argument("--in", "-i", dest="input", default=".", help="Input file or directory (default: .)")
    generate_parser.add_argument("--out", "-o", help="Output directory (default: next to the sources)")
    generate_parser.add_argument("--recursive", "-r", action=argparse.BooleanOptionalAction, default=True,
                                 help="Include subdirectories (default: on)")
    generate_parser.add_argument("--empty", action="store_true", help="Use empty values instead of placeholders")
    generate_parser.add_argument("--overwrite", action="store_true", help="Replace existing target values")
    generate_parser.add_argument("--placeholder", help="Placeholder text, {0} is the base value "
                                                       "(default: '@@MISSING@@ {0}')")

    # translate command
    translate_parser = subparsers.add_parser("translate", help="Machine-translate entries")
    translate_parser.add_argument("target", help="Target language (e.g. tr)")
    translate_parser.add_argument("--from", "-f", dest="from_culture", default="en", help="Source language (default: en)")
    translate_parser.add_argument("--in", "-i", dest="input", default=".", help="Input file or directory (default: .)")
    translate_parser.add_argument("--out", "-o", help="Output directory (default: next to the sources)")
    translate_parser.add_argument("--provider", "-p", default="google", choices=PROVIDERS,
                                  help="Translation provider (default: google)")
    translate_parser.add_argument("--api-key", "-k", help="Provider API key (default: from environment)")
    translate_parser.add_argument("--endpoint", help="Provider endpoint (LibreTranslate, Azure OpenAI, Ollama)")
    translate_parser.add_argument("--model", "-m", help="Model name for LLM providers")
    translate_parser.add_argument("--recursive", "-r", action=argparse.BooleanOptionalAction, default=True,
                                  help="Include subdirectories (default: on)")
    translate_parser.add_argument("--overwrite", action="store_true", help="Re-translate existing values")
    translate_parser.add_argument("--only-missing", action=argparse.BooleanOptionalAction, default=True,
                                  help="Only translate missing or empty values (default: on)")
    translate_parser.add_argument("--delay", type=int, default=100, help="Delay between calls in ms (default: 100)")
    translate_parser.add_argument("--parallel", type=int, default=1, help="Concurrent requests (default: 1)")

    # watch command
    watch_parser = subparsers.add_parser("watch", help="Re-run scan or check on changes")
    watch_parser.add_argument("path", help="Directory to watch")
    watch_parser.add_argument("--base", "-b", default="en", help="Base culture (default: en)")
    watch_parser.add_argument("--targets", "-t", help="Target cultures, comma-separated")
    watch_parser.add_argument("--mode", "-m", default="scan", choices=["scan", "check"], help="What to run (default: scan)")
    watch_parser.add_argument("--recursive", "-r", action=argparse.BooleanOptionalAction, default=True,
                              help="Watch subdirectories (default: on)")
    watch_parser.add_argument("--debounce", type=int, default=500, help="Debounce delay in ms (default: 500)")

    # formats command
    subparsers.add_parser("formats", help="List supported formats")

    return parser


def configure_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity > 1:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s", stream=sys.stderr)


def run(argv: Optional[list[str]] = None) -> int:
    """Run the CLI and return the process exit status."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    configure_logging(args.verbose)
    registry = create_default_registry()

    try:
        result, exit_code = COMMANDS[args.command](args, registry)
    except KeyboardInterrupt:
        print(json.dumps({"status": "error", "error": "Interrupted", "error_type": "KeyboardInterrupt"}),
              file=sys.stderr)
        return 130
    except Exception as e:
        print(json.dumps({
            "status": "error",
            "error": str(e),
            "error_type": type(e).__name__,
        }), file=sys.stderr)
        return 1

    print(json.dumps(result, indent=2, ensure_ascii=False))
    write_output(result, getattr(args, "output", None))
    return exit_code


def main():
    sys.exit(run())


if __name__ == "__main__":
    main()
