from __future__ import annotations

import sys

from . import analysis_cli


def main(argv: list[str] | None = None) -> int:
    if argv is None:
        argv = sys.argv[1:]

    if argv and argv[0] in ("-h", "--help"):
        p = analysis_cli._build_parser()
        p.prog = "git-report"
        p.print_help()
        print("")
        print("commands:")
        print("  multi          Analyze several repositories and merge the results.")
        print("  init           Create a sample git-report.json.")
        print("")
        print("Run `git-report <command> --help` for command-specific options.")
        return 0
    if argv and argv[0] == "multi":
        return analysis_cli.multi_main(argv[1:])
    if argv and argv[0] == "init":
        return analysis_cli.init_main(argv[1:])
    return analysis_cli.main(argv)


if __name__ == "__main__":
    raise SystemExit(main())
