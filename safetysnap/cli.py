# safetysnap/cli.py
import argparse
import json
import logging
import os
import sys

from safetysnap import config
from safetysnap.pipeline import analyze_upload
from safetysnap.schemas import AnalysisOut, label_catalog

log = logging.getLogger(__name__)


def read_upload(path):
    """Raw bytes of `path`; an unreadable file yields ``b""`` so it takes the fallback tier."""
    try:
        with open(path, "rb") as fh:
            return fh.read()
    except OSError as exc:
        log.warning("cannot read %s (%s); using filename fallback", path, exc)
        return b""


def build_parser():
    p = argparse.ArgumentParser(prog="safetysnap", description="Rule-based PPE detection for still images")
    p.add_argument("images", nargs="*", help="image files to analyze")
    p.add_argument("--labels", action="store_true", help="print the label catalog and exit")
    p.add_argument("--pretty", action="store_true", help="indent JSON output")
    p.add_argument("--parallel", action="store_true", default=None, help="run class pipelines on a thread pool")
    p.add_argument("--log-level", default=config.LOG_LEVEL)
    return p


def main(argv=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=getattr(logging, str(args.log_level).upper(), logging.INFO),
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    indent = 2 if args.pretty else None
    if args.labels:
        print(json.dumps({"labels": [lbl.model_dump() for lbl in label_catalog()]}, indent=indent))
        return 0
    if not args.images:
        build_parser().print_usage(sys.stderr)
        return 2
    missing = [p for p in args.images if not os.path.isfile(p)]
    if missing:
        for p in missing:
            log.error("no such file: %s", p)
        return 2
    for path in args.images:
        result = analyze_upload(read_upload(path), filename=os.path.basename(path), parallel=args.parallel)
        print(json.dumps(AnalysisOut.from_result(result).model_dump(), indent=indent))
    return 0


if __name__ == "__main__":
    sys.exit(main())
