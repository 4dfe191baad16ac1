from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from record_import.cli.runner import import_file
from record_import.db.initialize import db_init
from record_import.errors import ImportFault
from record_import.parsing.registry import PROFILE_NAMES, get_profile
from record_import.sinks.files import write_sample


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _run_one(*, input_path: Path, profile_name: str, out_path: Path | None, write: bool, persist: bool) -> int | None:
    """
    Import one file and narrate it. Returns the number of records with errors,
    or `None` when the import failed outright.
    """
    try:
        result = import_file(
            input_path=input_path,
            profile_name=profile_name,
            out_path=out_path,
            write=write,
            persist=persist,
        )
    except (ImportFault, OSError) as e:
        print(f"Erro ao importar {profile_name}: {e}", file=sys.stderr)
        return None

    if result.report_path is not None:
        print(f"Relatorio gerado: {result.report_path}")
    if result.report_id is not None:
        print(f"Relatorio persistido: report_id={result.report_id}")
    print(result.report.to_json())
    print(result.summary.render_one_line())
    return result.report.total_with_error


def main(argv: list[str] | None = None) -> int:
    """
    A CLI for validating and summarizing delimited record files.

    The `cmd` options are:
    ## run:
    Import one file with one profile.
    - `--input` as the path to the data,
    - `--profile` as the rule set to validate/aggregate with (`roster` or `catalog`),
    - `--out` as where to write the JSON report (default: next to the input),
    - `--no-write` to skip the report file, `--persist` to store it in Postgres,
    - `--fail-on-errors` to exit 1 when any record was rejected.

    ### Example run usage:
    - `record-import run --input data/alunos.csv --profile roster`
    - `record-import run --input data/produtos.csv --profile catalog --persist`

    ## samples:
    Write the sample inputs (`alunos.csv`, `produtos.csv`) into `--dir`.

    ## demo:
    Write the samples, then import every profile against its sample.

    ## db:
    Database controlling commands.
    - `init` runs the schema SQL (`--sql` file or dir of `.sql` files).
    """
    p = argparse.ArgumentParser(prog="record-import")
    p.add_argument("-v", "--verbose", action="store_true", help="Debug logging on stderr.")
    sub = p.add_subparsers(dest="cmd", required=True)

    # run cmd
    run = sub.add_parser("run", help="Import one file and write its report.")
    run.add_argument("--input", required=True, help="Path to the input CSV.")
    run.add_argument("--profile", required=True, choices=list(PROFILE_NAMES))
    run.add_argument("--out", default=None, help="Path of the JSON report (default: <stem>.<profile>.report.json).")
    run.add_argument("--no-write", action="store_true", help="Do not write the report file.")
    run.add_argument("--persist", action="store_true", help="Also store the report in Postgres.")
    run.add_argument("--fail-on-errors", action="store_true", help="Exit 1 when any record has errors.")

    # samples cmd
    samples = sub.add_parser("samples", help="Write sample input files.")
    samples.add_argument("--dir", default=".", help="Directory to write into.")

    # demo cmd
    demo = sub.add_parser("demo", help="Write samples and import all of them.")
    demo.add_argument("--dir", default=".", help="Directory for samples and reports.")

    # db cmd
    db = sub.add_parser("db", help="Database utilities.")
    db_sub = db.add_subparsers(dest="db_cmd", required=True)

    db_init_p = db_sub.add_parser("init", help="Initialize the report ledger schema from SQL file(s).")
    db_init_p.add_argument("--sql", default="sql", help="Path to schema SQL file OR a directory of `.sql` files.")

    args = p.parse_args(argv)
    _configure_logging(args.verbose)


    if args.cmd == "run":
        rejected = _run_one(
            input_path=Path(args.input),
            profile_name=args.profile,
            out_path=Path(args.out) if args.out else None,
            write=not args.no_write,
            persist=args.persist,
        )
        if rejected is None:
            return 1
        if args.fail_on_errors and rejected > 0:
            return 1
        return 0

    if args.cmd == "samples":
        for name in PROFILE_NAMES:
            profile = get_profile(name)
            path = write_sample(Path(args.dir), profile.sample_filename, profile.sample_text)
            print(f"{name}: {path}")
        return 0

    if args.cmd == "demo":
        print(">>> Executando importadores de exemplo")
        failed = 0
        for name in PROFILE_NAMES:
            profile = get_profile(name)
            path = write_sample(Path(args.dir), profile.sample_filename, profile.sample_text)
            print(f"\n--- Importando: {name} (arquivo: {path.name}) ---")
            # one failing import does not stop the next
            if _run_one(input_path=path, profile_name=name, out_path=None, write=True, persist=False) is None:
                failed += 1
        print("\nExecucao finalizada.")
        return 1 if failed else 0

    if args.cmd == "db" and args.db_cmd == "init":
        files = db_init(sql_path=Path(args.sql))
        print(f"Initialized schema from {args.sql} ({len(files)} file(s))")
        return 0


    return 2


if __name__ == "__main__":
    raise SystemExit(main())
