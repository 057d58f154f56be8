from __future__ import annotations

"""
CLI Argument Definition.

Defines the command-line schema: two optional positionals (root path and
output path) and a handful of flags.
"""

import argparse

from structure4ai.utils.i18n import i18n


def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the structure4ai CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog="structure4ai",
        description=i18n.t("app.description"),
    )

    p.add_argument(
        "path",
        nargs="?",
        default=None,
        help=i18n.t("cli.args.path"),
    )
    p.add_argument(
        "output",
        nargs="?",
        default=None,
        help=i18n.t("cli.args.output"),
    )

    p.add_argument(
        "--no-animation",
        dest="no_animation",
        action="store_true",
        help=i18n.t("cli.args.no_animation"),
    )
    p.add_argument(
        "--config",
        dest="config_file",
        metavar="FILE",
        default=None,
        help=i18n.t("cli.args.config"),
    )
    p.add_argument(
        "--dump-config",
        dest="dump_config",
        action="store_true",
        help=i18n.t("cli.args.dump_config"),
    )
    p.add_argument(
        "--save-config",
        dest="save_config",
        action="store_true",
        help=i18n.t("cli.args.save_config"),
    )
    p.add_argument(
        "--debug",
        action="store_true",
        help=i18n.t("cli.args.debug"),
    )

    return p
