"""Starter .vulntally.toml template."""

CONFIG_FILENAME = ".vulntally.toml"

DEFAULT_TOML = """\
# vulntally configuration
version = "1.0"

[aws]
profile = ""              # shared config profile; -p overrides
# region = "eu-central-1" # defaults to the profile's region
# page_size = 100         # findings per ListFindings call (1-100)

[filter]
# ignore = ["base-images", "sandbox"]   # repositories to exclude; -i overrides

[output]
format = "terminal"       # terminal | json
show_summary = true

[report]
allow_partial = false     # render partial results if a page request fails
"""
