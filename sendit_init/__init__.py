"""sendit-init: scaffold a React app from the sendit template.

Runs a fixed, resumable sequence of steps against a target directory:
- package.json scripts and lint/browser config
- template copy (plain or TypeScript) and .gitignore normalization
- base dependency install and an initial git commit
- house tooling extras and an optional deployment template
"""

__all__ = []
