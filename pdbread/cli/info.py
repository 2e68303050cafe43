"""
pdbread info: supported records and column layouts.
"""


def info():
    """Show supported record kinds, format variants and column layouts."""
    import platform

    from pdbread import __version__
    from pdbread.format.dispatch import default_keywords
    from pdbread.format.layouts import FORMAT_VARIANTS, TRANSFORM_NARROW, TRANSFORM_WIDE

    print(f"pdbread   : {__version__}")
    print(f"Python    : {platform.python_version()}")
    print()

    # ── Records ───────────────────────────────────────────────────────
    keywords = default_keywords()
    print("Records   :")
    for keyword in sorted(keywords, key=len, reverse=True):
        print(f"  {keyword:<20s} -> {keywords[keyword].value}")
    print()

    # ── Variants ──────────────────────────────────────────────────────
    print("Variants  :")
    for name, variant in FORMAT_VARIANTS.items():
        print(f"  {name:<10s} {variant.description}")
    print()

    # ── Layouts ───────────────────────────────────────────────────────
    default = FORMAT_VARIANTS["wwpdb-3.3"]
    tables = list(default.layouts.items())
    tables += [("BIOMT/SMTRY (wide)", TRANSFORM_WIDE), ("BIOMT/SMTRY (legacy)", TRANSFORM_NARROW)]
    for title, layout in tables:
        print(f"{title}:")
        for spec in layout.fields:
            print(
                f"  [{spec.start:>2d},{spec.end:>2d})  {spec.name:<20s} "
                f"{spec.kind:<7s} {spec.policy.value}"
            )
        print()
