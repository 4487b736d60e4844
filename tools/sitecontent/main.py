#!/usr/bin/env python3
"""
Content pipeline for the blog.

- Loads posts (Markdown with YAML front matter, or notebooks) from content/
- Validates front matter: title, date required; tags, draft optional
- Resolves /blog/<slug> permalinks, failing on slug collisions
- Leaves drafts out of published builds (kept in --preview)
- Orders posts newest first with prev/next links
- Builds tag, series and related-post indices
- Writes the build artifact (JSON, or YAML for .yml/.yaml targets)
"""

from __future__ import annotations

import argparse
import pathlib
import sys
from typing import List, Optional

from .build import build_site, write_artifact
from .config import SITE_CONFIG, load_site_config
from .errors import BuildError


def _parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="sitecontent",
        description="Build the blog content index.",
    )
    ap.add_argument("--config", type=pathlib.Path, default=SITE_CONFIG,
                    help="site.yml with build settings")
    ap.add_argument("--content", type=pathlib.Path,
                    help="content directory (overrides config)")
    ap.add_argument("--out", type=pathlib.Path,
                    help="artifact path, .json or .yml (overrides config)")
    ap.add_argument("--preview", action="store_true",
                    help="include drafts")
    ap.add_argument("--jobs", type=int, help="parallel loaders")
    ap.add_argument("--git-dates", action="store_true", default=None,
                    help="add lastmod from git history")
    return ap


def main(argv: Optional[List[str]] = None) -> int:
    args = _parser().parse_args(argv)

    try:
        cfg = load_site_config(args.config)
        if args.content is not None:
            cfg["content_dir"] = str(args.content)
        if args.out is not None:
            cfg["output"] = str(args.out)
        if args.preview:
            cfg["mode"] = "preview"
        if args.jobs is not None:
            cfg["jobs"] = args.jobs
        if args.git_dates:
            cfg["git_dates"] = True

        build = build_site(
            pathlib.Path(cfg["content_dir"]),
            mode=cfg["mode"],
            url_prefix=cfg["url_prefix"],
            related_limit=int(cfg["related_limit"]),
            excerpt_words=int(cfg["excerpt_words"]),
            git_dates=bool(cfg["git_dates"]),
            jobs=max(int(cfg["jobs"]), 1),
        )
        write_artifact(build, pathlib.Path(cfg["output"]))
    except BuildError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    print(f"✓ {len(build.documents)} posts, {len(build.tag_index)} tags ({build.mode})")
    return 0


if __name__ == "__main__":
    sys.exit(main())
