import sys
import logging
from argparse import ArgumentParser

from .log_setup import setup_logger
from .rank_comb import MultisetRankCodec, RankCombError, DEFAULT_INT_BITS

logger = logging.getLogger(__name__)


def _int_bits(value):
    return None if value.lower() == 'none' else int(value)


def parse_arguments(argv=None):
    """Parses command-line arguments using argparse.

    Returns:
        Namespace: An object containing parsed arguments.
    """

    parser = ArgumentParser(prog='multirank',
                            description="Print every permutation of a multiset in rank order")

    parser.add_argument(
        "-b", "--base", type=str, default='001123', help="Base multiset, one label per character"
    )
    parser.add_argument(
        "-w", "--int-bits", type=_int_bits, default=DEFAULT_INT_BITS,
        help="Integer width the potential must fit in: 8, 16, 32, 64 or 'none'"
    )
    parser.add_argument("-l", "--limit", type=int, default=None, help="Stop after this many ranks")
    parser.add_argument("-v", "--verbose", action="store_true", default=False, help="Log debug output to stderr")
    parser.add_argument("--no-verify", action="store_true", default=False, help="Skip re-ranking each permutation")

    return parser.parse_args(argv)


def main(argv=None):
    """Entry point: unrank, re-rank and print every permutation of the base multiset."""
    args = parse_arguments(argv)
    setup_logger('multirank', 'multirank', logging.DEBUG if args.verbose else logging.WARNING)
    logger.debug(f'main: base={args.base!r}, int_bits={args.int_bits}, limit={args.limit}')

    try:
        codec = MultisetRankCodec(args.base, int_bits=args.int_bits)
    except RankCombError as e:
        print(f"multirank: {e}", file=sys.stderr)
        return 2

    print(f"The maximum potential rank is: {codec.potential}")

    for i, perm in enumerate(codec.permutations(0, args.limit)):
        if not args.no_verify:
            j = codec.rank(perm)
            if j != i:
                logger.error(f"Round trip mismatch: {i} -> {perm} -> {j}")
                return 1
        print(f"Start: {i} Permutation: [{', '.join(map(str, perm))}]")

    return 0


if __name__ == '__main__':
    sys.exit(main())
