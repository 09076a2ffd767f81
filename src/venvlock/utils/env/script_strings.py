from __future__ import annotations


GET_PYTHON_INFO_ONELINER = (
    "import sys; print('{}.{}'.format(*sys.version_info[:2])); print(sys.platform)"
)
