"""
Kitchen CAD entry point.

Usage:
    python -m kitchen_cad serve [--port 3000] [--host 0.0.0.0]
    python -m kitchen_cad catalog        # validate and list equipment templates
"""

import sys


def _option(args: list[str], name: str, default: str) -> str:
    if name in args:
        i = args.index(name)
        if i + 1 < len(args):
            return args[i + 1]
    return default


def _print_catalog() -> int:
    from kitchen_cad.catalog.loader import load_catalog

    result = load_catalog()
    for category, templates in result.catalog.categories:
        print(f"{category}:")
        for t in templates:
            print(f"  {t.name:<24} {t.width}x{t.height}  "
                  f"power={t.default_specs.power}  water={t.default_specs.water}")
    for err in result.errors:
        print(f"ERROR {err}", file=sys.stderr)
    return 0 if result.ok else 1


def main():
    args = sys.argv[1:]
    cmd = args[0] if args else "serve"

    if cmd == "serve":
        from kitchen_cad.web.server import main as serve
        serve(host=_option(args, "--host", "127.0.0.1"),
              port=int(_option(args, "--port", "8000")))
    elif cmd == "catalog":
        sys.exit(_print_catalog())
    else:
        print(f"Unknown command: {cmd}")
        print(__doc__)
        sys.exit(1)


if __name__ == "__main__":
    main()
