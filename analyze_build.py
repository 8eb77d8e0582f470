#!/usr/bin/env python3
"""
Build Trace Analyzer - command line entry point
"""

import logging
import sys

from build_trace_analyzer import BuildAnalyzer
from build_trace_analyzer.core.errors import EmptyTraceSet, SessionError
from build_trace_analyzer.session import start_session


def main(argv=None):
    import argparse
    parser = argparse.ArgumentParser(
        description='Analyze clang -ftime-trace JSON files and report where build time goes.',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python analyze_build.py --start build/
  (build with -ftime-trace)
  python analyze_build.py --analyze build/
  python analyze_build.py --files a.cpp.json b.cpp.json -o report.txt
        """
    )
    mode = parser.add_mutually_exclusive_group(required=True)
    mode.add_argument('--start', metavar='ARTIFACTS_DIR', help='Start a tracing session in ARTIFACTS_DIR')
    mode.add_argument('--analyze', metavar='ARTIFACTS_DIR',
                      help='Analyze trace files written under ARTIFACTS_DIR since the session start')
    mode.add_argument('--files', nargs='+', metavar='TRACE', help='Analyze the given trace files')
    parser.add_argument('-o', '--output', dest='output_file', help='Write the report to this file instead of stdout')
    parser.add_argument('--top-n', type=int, default=10, help='Entries per ranked section (default: 10)')
    parser.add_argument('--max-name-length', type=int, default=70,
                        help='Truncate longer names in the report (default: 70)')
    parser.add_argument('--workers', type=int, default=1, help='Processes used to decode trace files (default: 1)')
    parser.add_argument('--include-depth', type=int, default=5,
                        help='Files listed in "included via" chains (default: 5)')
    parser.add_argument('-v', '--verbose', action='store_true', help='Log skipped files and tree diagnostics')
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(levelname)s: %(message)s'
    )

    if args.start:
        try:
            path = start_session(args.start)
        except SessionError as e:
            print(f"Error: {e}")
            return 1
        print(f"Build tracing started ({path}). Build with '-ftime-trace', "
              f"then run 'analyze_build.py --analyze {args.start}'.")
        return 0

    try:
        analyzer = BuildAnalyzer(
            top_n=args.top_n,
            max_name_length=args.max_name_length,
            num_workers=args.workers,
            header_chain_depth=args.include_depth
        )
    except ValueError as e:
        print(f"Error: {e}")
        return 1

    try:
        if args.analyze:
            print(f"Analyzing build trace from '{args.analyze}'...")
            analyzer.analyze_directory(args.analyze)
        else:
            analyzer.analyze_files(sorted(set(p.replace('\\', '/') for p in args.files)))
    except (EmptyTraceSet, SessionError) as e:
        print(f"Error: {e}")
        return 1

    if args.output_file:
        with open(args.output_file, 'w') as out:
            analyzer.write_report(out)
        print(f"\n✓ Report written to {args.output_file}")
    else:
        analyzer.write_report(sys.stdout)
    return 0


if __name__ == "__main__":
    sys.exit(main())
