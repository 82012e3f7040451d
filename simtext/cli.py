"""Command-line interface for building a lexicon model and generating text."""

import argparse
import logging
import sys
from pathlib import Path
from typing import Iterator, List, Optional

import torch

from simtext.models.lexicon import LexiconModel, NoContinuationError
from simtext.data.dataset import LexemeTokenizer, iter_chunks
from simtext.utils.trainer import (
    DEAD_END_POLICIES,
    DEFAULT_SENTINEL,
    DEFAULT_SOFT_LIMIT,
    Generator,
    Trainer,
)


logger = logging.getLogger(__name__)

DEFAULT_CORPUS = Path('text.txt')


def setup_logging(level=logging.INFO):
    """Configure logging."""
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )


def read_chunks(path: Path) -> Iterator[str]:
    """Stream whitespace-delimited chunks from a corpus file.

    Bytes that are not valid UTF-8 are decoded as U+FFFD, which the
    tokenizer drops.
    """
    with open(path, 'r', encoding='utf-8', errors='replace') as f:
        yield from iter_chunks(f)


def run(args) -> int:
    """Build the model from the corpus and print one generated text."""
    generator = torch.Generator()
    if args.seed is None:
        generator.seed()
    else:
        generator.manual_seed(args.seed)

    tokenizer = LexemeTokenizer()
    model = LexiconModel(generator)
    trainer = Trainer(model, tokenizer, sentinel=args.sentinel)

    logger.debug("----Input----")
    try:
        trainer.train(read_chunks(args.data))
    except OSError as e:
        logger.error(f"Can't open the file specified: {args.data} ({e})")
        return 1

    unique_count = model.unique_lexeme_count()
    if not unique_count:
        logger.info("Got no parsable data on the input.")
        return 0
    logger.info(f"Model holds {unique_count} unique lexemes")
    model.dump()

    sampler = Generator(
        model,
        tokenizer,
        sentinel=args.sentinel,
        soft_limit=args.soft_limit,
        max_lexemes=args.max_lexemes,
        on_dead_end=args.on_dead_end,
    )
    logger.debug("----Generated----")
    try:
        result = sampler.generate()
    except NoContinuationError as e:
        logger.error(str(e))
        return 1

    print(result.text)
    logger.info(
        f"Success. Generated text of {result.count} lexemes "
        f"from {unique_count} unique ones."
    )
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description='Generate semi-random text from adjacent lexeme pairs'
    )
    parser.add_argument(
        '--data',
        type=Path,
        default=DEFAULT_CORPUS,
        help='Corpus file'
    )
    parser.add_argument(
        '--soft-limit',
        type=int,
        default=DEFAULT_SOFT_LIMIT,
        help='Steps to take before the sentinel may end the text'
    )
    parser.add_argument(
        '--sentinel',
        type=str,
        default=DEFAULT_SENTINEL,
        help='Lexeme that starts and terminates generation'
    )
    parser.add_argument(
        '--max-lexemes',
        type=int,
        default=None,
        help='Hard cap on generated lexemes (no cap by default)'
    )
    parser.add_argument('--seed', type=int, default=None)
    parser.add_argument(
        '--on-dead-end',
        choices=DEAD_END_POLICIES,
        default='raise'
    )
    parser.add_argument('--verbose', action='store_true')

    args = parser.parse_args(argv)
    if args.soft_limit < 0:
        parser.error('--soft-limit must be >= 0')
    if args.max_lexemes is not None and args.max_lexemes < 1:
        parser.error('--max-lexemes must be >= 1')
    setup_logging(logging.DEBUG if args.verbose else logging.INFO)

    return run(args)


if __name__ == '__main__':
    sys.exit(main())
