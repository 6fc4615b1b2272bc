import argparse
import os
import random
import sys
from pathlib import Path

from cfgevo.bnf import BnfParseError, format_grammar, parse
from cfgevo.cli.style import styler
from cfgevo.cli.ui import rule_table, section, tree_string
from cfgevo.codec import int_codec
from cfgevo.codons import Codons
from cfgevo.config import Settings
from cfgevo.generators import DerivationTreeGenerator, Expansion, SentenceGenerator
from cfgevo.grammar import NonTerminal
from cfgevo.highlight import highlight_bnf
from cfgevo.logging_config import set_file, set_level, setup_logger

logger = setup_logger(__name__)


def get_log_level_from_env(env_str: str):
    if env_str is None:
        return os.getenv("LOG_LEVEL", "INFO")
    env_str = env_str.strip().lower()
    if env_str in ["prod", "production"]:
        return "WARNING"
    if env_str in ["debug", "dev", "development"]:
        return "DEBUG"
    return "INFO"


def parse_codons(text: str) -> list[int]:
    try:
        values = [int(part) for part in text.replace(" ", "").split(",") if part]
    except ValueError:
        raise argparse.ArgumentTypeError(f"codons must be comma separated integers: {text!r}")
    if not values:
        raise argparse.ArgumentTypeError("at least one codon is needed")
    return values


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="cfgevo", description="Derive sentences from BNF grammars driven by codons.")
    parser.add_argument("-env", type=str, default=None, help="Set environment mode: prod or debug (sets logger level)")
    sub = parser.add_subparsers(dest="command", required=True)

    show = sub.add_parser("show", help="Parse a grammar file and print its rules")
    show.add_argument("grammar", type=Path)

    derive = sub.add_parser("derive", help="Derive one sentence from explicit codons")
    derive.add_argument("grammar", type=Path)
    derive.add_argument("--codons", type=parse_codons, required=True, help="Comma separated codons, e.g. 0,0,1")
    derive.add_argument("--limit", type=int, default=None, help="Maximal number of expansions")
    derive.add_argument("--tree", action="store_true", help="Print the derivation tree")
    derive.add_argument(
        "--expansion",
        default=Expansion.LEFT_TO_RIGHT.value,
        choices=[e.value for e in Expansion],
    )

    sample = sub.add_parser("sample", help="Decode random genomes into sentences")
    sample.add_argument("grammar", type=Path)
    sample.add_argument("--count", type=int, default=5)
    sample.add_argument("--seed", type=int, default=None)
    sample.add_argument("--codon-count", type=int, default=None)
    sample.add_argument("--limit", type=int, default=None)
    return parser


def _format_sentence(symbols) -> str:
    text = styler.sentence(symbols)
    if any(isinstance(s, NonTerminal) for s in symbols):
        return f"{text} {styler.tag('partial', 'error')}"
    return text


def run_show(args, settings: Settings) -> int:
    grammar = parse(args.grammar.read_text(encoding="utf-8"))
    print(section("Grammar"))
    print(highlight_bnf(format_grammar(grammar), enabled=styler.enabled), end="")
    print(section("Rules"))
    print(rule_table(grammar))
    return 0


def run_derive(args, settings: Settings) -> int:
    grammar = parse(args.grammar.read_text(encoding="utf-8"))
    limit = settings.limit if args.limit is None else args.limit
    index = Codons.of_ints(args.codons)
    if args.tree:
        root = DerivationTreeGenerator(index, limit).generate(grammar)
        print(tree_string(root))
        print(_format_sentence(root.sentence()))
    else:
        symbols = SentenceGenerator(index, limit, Expansion(args.expansion)).generate(grammar)
        print(_format_sentence(symbols))
    return 0


def run_sample(args, settings: Settings) -> int:
    grammar = parse(args.grammar.read_text(encoding="utf-8"))
    codec = int_codec(
        grammar,
        (0, settings.codon_max),
        settings.codon_count if args.codon_count is None else args.codon_count,
        settings.limit if args.limit is None else args.limit,
    )
    rng = random.Random(args.seed)
    for _ in range(args.count):
        print(_format_sentence(codec.decode(codec.new_genotype(rng))))
    return 0


COMMANDS = {
    "show": run_show,
    "derive": run_derive,
    "sample": run_sample,
}


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    settings = Settings.from_env()

    log_level = get_log_level_from_env(args.env) if args.env else settings.log_level
    os.environ["LOG_LEVEL"] = log_level
    os.environ["LOG_FILE"] = settings.log_file
    set_level(log_level)
    set_file(settings.log_file)

    logger.info(f"Running command {args.command} on {args.grammar}")
    try:
        return COMMANDS[args.command](args, settings)
    except BnfParseError as e:
        logger.error(f"Failed to parse {args.grammar}: {e}")
        print(styler.tag("error", "error"), f"{args.grammar}: {e}")
        return 1
    except ValueError as e:
        logger.error(f"Invalid arguments for {args.command}: {e}")
        print(styler.tag("error", "error"), str(e))
        return 1
    except OSError as e:
        logger.error(f"Failed to read {args.grammar}: {e}")
        print(styler.tag("error", "error"), str(e))
        return 1


if __name__ == "__main__":
    sys.exit(main())
