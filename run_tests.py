"""Run the hexframe test suite, optionally by component, with coverage."""

import argparse
import importlib.util
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parent
TEST_DIR = ROOT / 'tests'

# Test modules grouped by the part of hexframe they exercise
COMPONENTS = {
    'codec': ['test_schema', 'test_placeholder', 'test_sanitizer', 'test_encoder', 'test_codec'],
    'dump': ['test_hexdump'],
    'decode': ['test_detector', 'test_decoder'],
    'io': ['test_reader', 'test_exporters', 'test_templates'],
}

# Optional libraries whose tests are skipped when missing
OPTIONAL_LIBRARIES = {
    'dpkt': 'pcap reading and writing',
    'pandas': 'DataFrame and CSV export',
    'scapy': 'IPv4 header cross-check',
}


def missing_libraries():
    """Return the optional libraries that are not importable."""
    return [name for name in OPTIONAL_LIBRARIES if importlib.util.find_spec(name) is None]


def build_args(components=None, keyword=None, coverage=True, verbose=False):
    """Build the pytest argument list.

    Args:
        components: Component names from ``COMPONENTS``; all tests when empty
        keyword: pytest ``-k`` expression
        coverage: Measure coverage of the hexframe package
        verbose: Run pytest in verbose mode
    """
    if components:
        unknown = [name for name in components if name not in COMPONENTS]
        if unknown:
            raise ValueError(f"Unknown component(s) {unknown}, expected {sorted(COMPONENTS)}")
        args = [str(TEST_DIR / f'{module}.py') for name in components for module in COMPONENTS[name]]
    else:
        args = [str(TEST_DIR)]

    args += ['--tb=short', '-rs']
    if verbose:
        args.append('-v')
    if keyword:
        args += ['-k', keyword]
    if coverage:
        if importlib.util.find_spec('pytest_cov') is None:
            print("pytest-cov not installed, running without coverage")
        else:
            args += ['--cov=hexframe', '--cov-report=term-missing']
    return args


def main(argv=None):
    parser = argparse.ArgumentParser(description='Run hexframe unit tests')
    parser.add_argument('components', nargs='*', metavar='component',
                        help=f"Components to test: {', '.join(COMPONENTS)} (default: all)")
    parser.add_argument('-k', '--keyword', help='Only run tests matching this expression')
    parser.add_argument('--no-coverage', action='store_true', help='Disable coverage reporting')
    parser.add_argument('-v', '--verbose', action='store_true', help='Verbose output')
    parser.add_argument('-l', '--list', action='store_true', help='List components and their test modules')
    args = parser.parse_args(argv)

    if args.list:
        for name, modules in COMPONENTS.items():
            print(f"  {name}: {', '.join(modules)}")
        return 0

    for name in missing_libraries():
        print(f"{name} not installed, {OPTIONAL_LIBRARIES[name]} tests will be skipped")

    try:
        pytest_args = build_args(args.components, args.keyword, not args.no_coverage, args.verbose)
    except ValueError as e:
        parser.error(str(e))
    return pytest.main(pytest_args)


if __name__ == '__main__':
    sys.exit(main())
