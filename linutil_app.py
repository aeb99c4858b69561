#!/usr/bin/env python3
from __future__ import annotations

import argparse
import sys
from linutil.catalog import Catalog
from linutil.config import CONFIG_FILE, load_config
from linutil.errors import PlatformError
from linutil.logging_config import setup_logging
from linutil.systeminfo import system_info
from linutil.ui_app import LinutilApp

def main() -> None:
    ap = argparse.ArgumentParser(prog="linutil")
    ap.add_argument("--config", default=CONFIG_FILE)
    ap.add_argument("--scripts", help="directory of built scripts")
    ap.add_argument("--os-release", help="platform metadata file")
    ap.add_argument("--log-level")
    args = ap.parse_args()

    cfg = load_config(args.config).override(
        scripts_dir=args.scripts, os_release=args.os_release, log_level=args.log_level
    )
    setup_logging(cfg.log_level, cfg.log_file)

    try:
        system = system_info(cfg.os_release)
    except PlatformError as exc:
        print(f"linutil: {exc}", file=sys.stderr)
        sys.exit(1)

    LinutilApp(system, Catalog.load(cfg.scripts_dir), cfg).run()

if __name__ == "__main__":
    main()
