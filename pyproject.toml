[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "smpp_pdu"
version = "0.1.0"
description = "SMPP PDU body fields, TLV parameters and short message text codecs"
requires-python = ">=3.10"
dependencies = []
keywords = ["smpp", "sms", "pdu", "tlv", "telephony"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Communications :: Telephony",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["smpp_pdu"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
