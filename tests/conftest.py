"""Shared test fixtures."""

import tempfile
from pathlib import Path

import pytest

from mailredirect.mail import Mail
from mailredirect.mime import parse_message

SIMPLE_MESSAGE = b"""\
Date: Mon, 6 Jan 2025 10:00:00 +0000
From: Alice <alice@example.com>
To: bob@example.com
Subject: subject

Hello Bob,
This is the original body.
"""

FULL_MESSAGE = b"""\
Return-Path: <alice@example.com>
Received: from mx.example.com by mail.example.org
Date: Mon, 6 Jan 2025 10:00:00 +0000
From: Alice <alice@example.com>
Reply-To: replies@example.com
To: bob@example.com,
 carol@example.com
Message-ID: <orig-1@example.com>
X-Mailer: TestMailer 1.0
Subject: Quarterly report
Content-Type: text/plain; charset="utf-8"

Numbers are attached.
"""

UNDECODABLE_MESSAGE = b"""\
From: Alice <alice@example.com>
To: bob@example.com
Subject: broken
Content-Type: text/plain; charset="x-no-such-charset"

This body cannot be decoded.
"""

MULTIPART_MESSAGE = b"""\
From: Alice <alice@example.com>
To: bob@example.com
Subject: multipart
MIME-Version: 1.0
Content-Type: multipart/mixed; boundary="outer"

--outer
Content-Type: multipart/alternative; boundary="inner"

--inner
Content-Type: text/html; charset="utf-8"

<p>HTML version</p>
--inner
Content-Type: text/plain; charset="utf-8"

Plain version
--inner--
--outer
Content-Type: text/plain; charset="utf-8"
Content-Disposition: attachment; filename="notes.txt"

Attached notes
--outer--
"""


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def simple_mail():
    """Original mail with Date, From, To and Subject headers only."""
    return Mail(message=parse_message(SIMPLE_MESSAGE), name="simple")


@pytest.fixture
def full_mail():
    """Original mail carrying every relevant header plus unrelated ones."""
    return Mail(message=parse_message(FULL_MESSAGE), name="full")


@pytest.fixture
def undecodable_mail():
    """Original mail whose body uses an unknown charset."""
    return Mail(message=parse_message(UNDECODABLE_MESSAGE), name="undecodable")


@pytest.fixture
def multipart_mail():
    return Mail(message=parse_message(MULTIPART_MESSAGE), name="multipart")


@pytest.fixture
def target_mail():
    """Empty mail to compose into."""
    return Mail.new(name="target")


@pytest.fixture
def original_eml(temp_dir):
    """Original message stored on disk."""
    path = temp_dir / "original.eml"
    path.write_bytes(FULL_MESSAGE)
    return path


@pytest.fixture
def sample_config_toml(temp_dir):
    """Create a sample TOML config file."""
    config_path = temp_dir / "config.toml"
    config_path.write_text('''
[redirect]
inline = "all"
attachment = "MESSAGE"
attach_error = true
message = "Your message could not be delivered."
subject = "Undeliverable: Quarterly report"

[logging]
level = "DEBUG"
''')
    return config_path
