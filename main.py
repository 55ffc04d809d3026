from __future__ import annotations
from typing import List, Optional
from lexer import Lexer
from tokens import Token, TokenKind
from ast_nodes import ASTNode
from parser import Parser, ParseError

from pretty_printer import PrettyPrinter
import json
from ast_json import ast_to_json, tokens_to_json
from ast_viz import write_and_render


def lex(text: str) -> List[Token]:
    """Tokenize input string."""
    lexer = Lexer(text)
    return lexer.tokenize()


def parse_tokens(tokens: List[Token]) -> List[ASTNode]:
    """Parse tokens into top-level AST nodes."""
    parser = Parser(tokens)
    return parser.parse()


def parse_text(text: str) -> List[ASTNode]:
    """Convenience: lex+parse a source text into AST nodes."""
    return parse_tokens(lex(text))


def process_program(
    text: str,
    *,
    print_tokens: bool = False,
    print_ast: bool = True,
    print_source: bool = True,
    keep_going: bool = False,
    json_path: Optional[str] = None,
    viz_path: Optional[str] = None,
    viz_format: str = "svg",
) -> None:
    """Process a single program: lex, parse and optionally print or export stages.

    Flags control which parts are printed; exports are written only when a
    path is given.
    """
    try:
        tokens = lex(text)
        if print_tokens:
            print(PrettyPrinter.print_tokens(tokens, limit=50))

        illegal = [t for t in tokens if t.kind == TokenKind.ILLEGAL]
        for t in illegal:
            print(f"✗ Illegal input {t.lexeme!r} at {t.position}")

        errors: List[ParseError] = []
        if keep_going:
            results = Parser(tokens).parse_all()
            nodes = [r for r in results if isinstance(r, ASTNode)]
            errors = [r for r in results if isinstance(r, ParseError)]
            for err in errors:
                print(f"Syntax Error: {err}")
        else:
            nodes = parse_tokens(tokens)

        if print_ast:
            print("\nAST:")
            print(PrettyPrinter.print_program(nodes))

        if print_source:
            print("\nSource:")
            for node in nodes:
                print(f"  {node.to_string()}")

        if not illegal and not errors:
            print(f"\n✓ Parsed {len(nodes)} expression(s)")

        # Optionally dump tokens + AST to JSON.
        if json_path:
            export = {
                "tokens": tokens_to_json(tokens),
                "ast": [ast_to_json(n) for n in nodes],
            }
            try:
                with open(json_path, "w", encoding="utf-8") as fh:
                    json.dump(export, fh, indent=2)
                print(f"Wrote tokens+AST JSON to {json_path}")
            except OSError as e:
                print(f"Failed to write JSON to {json_path}: {e}")

        # Optionally render visualization via Graphviz
        if viz_path:
            try:
                write_and_render(nodes, viz_path, fmt=viz_format)
                print(f"Wrote AST visualization to {viz_path}.{viz_format}")
            except Exception as e:
                print(f"Failed to render AST visualization to {viz_path}: {e}")

    except SyntaxError as e:
        print(f"Syntax Error: {e}")
    except Exception as e:
        print(f"Unexpected error: {e}")
        import traceback

        traceback.print_exc()


def interactive_mode(
    print_tokens: bool = False,
    print_ast: bool = True,
    print_source: bool = True,
    keep_going: bool = False,
) -> None:
    """Run an interactive REPL reading one snippet per line from stdin."""
    print("\nInteractive Parser Mode (type 'quit' to exit)")
    print("=" * 80)

    while True:
        try:
            text = input("\nEnter expression: ").strip()
            if text.lower() in ("quit", "exit", "q"):
                print("Goodbye!")
                break

            if not text:
                continue

            process_program(
                text,
                print_tokens=print_tokens,
                print_ast=print_ast,
                print_source=print_source,
                keep_going=keep_going,
            )

        except (KeyboardInterrupt, EOFError):
            print("\n\nExiting...")
            break


def build_arg_parser():
    import argparse

    parser = argparse.ArgumentParser(
        description="Lex and parse Elixir-style source from a file or interactively from stdin"
    )
    group = parser.add_mutually_exclusive_group()
    group.add_argument(
        "--file", "-f", dest="file", help="Path to source file to process"
    )
    group.add_argument(
        "--interactive",
        "-i",
        dest="interactive",
        action="store_true",
        help="Start interactive REPL mode",
    )
    # printing/verbosity options
    parser.add_argument(
        "--print-tokens", dest="print_tokens", action="store_true", help="Print tokens"
    )
    parser.add_argument(
        "--no-ast", dest="print_ast", action="store_false", help="Do not print AST"
    )
    parser.add_argument(
        "--no-source",
        dest="print_source",
        action="store_false",
        help="Do not print the canonical source of each expression",
    )
    parser.add_argument(
        "--keep-going",
        dest="keep_going",
        action="store_true",
        help="Report every parse error instead of stopping at the first",
    )

    # default behavior: print AST and source
    parser.set_defaults(
        print_tokens=False,
        print_ast=True,
        print_source=True,
        keep_going=False,
    )
    parser.add_argument(
        "--json", dest="json_path", help="Path to write tokens+AST JSON"
    )
    parser.add_argument(
        "--viz-ast",
        dest="viz_ast",
        help="Path (without extension) to write Graphviz visualization of the AST",
    )
    parser.add_argument(
        "--viz-format",
        dest="viz_format",
        default="svg",
        help="Format for Graphviz output (svg, png, pdf, etc)",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_arg_parser()
    args = parser.parse_args(argv)

    if args.interactive:
        interactive_mode(
            print_tokens=args.print_tokens,
            print_ast=args.print_ast,
            print_source=args.print_source,
            keep_going=args.keep_going,
        )
    elif args.file:
        try:
            with open(args.file, "r", encoding="utf-8") as fh:
                text = fh.read()
        except OSError as e:
            print(f"Failed to read file {args.file}: {e}")
            return 1

        process_program(
            text,
            print_tokens=args.print_tokens,
            print_ast=args.print_ast,
            print_source=args.print_source,
            keep_going=args.keep_going,
            json_path=args.json_path,
            viz_path=args.viz_ast,
            viz_format=args.viz_format,
        )
    else:
        parser.print_help()
    return 0


if __name__ == "__main__":
    import sys

    sys.exit(main())
