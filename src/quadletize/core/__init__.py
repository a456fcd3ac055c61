# topmark:header:start
#
#   project      : Quadletize
#   file         : __init__.py
#   file_relpath : src/quadletize/core/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 The Quadletize Authors
#
# topmark:header:end

"""Small shared helpers without dependencies on the rest of Quadletize."""
