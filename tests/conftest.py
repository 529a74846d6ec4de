"""Root test configuration: environment isolation and shared fixtures"""

import json
import smtplib

import pytest

from folio.config import Settings


SITE = {
    "name": "Jo",
    "tagline": "Engineer",
    "nav": [{"label": "Contact", "href": "/contact", "isHighlighted": True}],
    "socials": {"github": "https://github.com/jo"},
    "footerLinks": [{"label": "Resume", "href": "/resume.pdf"}],
    "resume": "/resume.pdf",
    "email": "jo@example.com",
    "address": "Remote",
}

PROFILE = {
    "hero": {
        "title": "Hi",
        "position": "Engineer",
        "description": "I build things.",
        "buttons": [{"label": "Contact", "href": "/contact"}],
        "image": {"alt": "me", "src": "/me.jpg"},
    },
    "experience": [{"company": "Acme", "role": "Dev", "details": ["x"], "stack": ["Python"]}],
    "skills": [{"title": "Backend", "icon": "FaDatabase", "items": ["Python"]}],
    "education": [{"school": "Uni", "degree": "BSc"}],
}

POSTS = {
    "older.md": "---\ntitle: Older\ndate: 2024-01-01\ntags: [a]\n---\n\n# Older\n",
    "newer.md": "---\ntitle: Newer\ndate: 2024-03-01\nexcerpt: Fresh\n---\n\n# Newer\n\nBody.\n",
    "undated.md": "---\ntitle: Undated\n---\n\n# Undated\n",
    "notes.txt": "not a post",
}


class FakeSMTP:
    """Stands in for an SMTP connection and for the factory that opens it."""

    def __init__(self, fail_subjects=()):
        self.sent = []
        self.fail_subjects = set(fail_subjects)
        self.opened = 0
        self.closed = False

    def __call__(self, settings):
        self.opened += 1
        return self

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.closed = True
        return False

    def send_message(self, msg):
        if msg["Subject"] in self.fail_subjects:
            raise smtplib.SMTPRecipientsRefused({msg["To"]: (550, b"mailbox unavailable")})
        self.sent.append(msg)


@pytest.fixture(autouse=True)
def isolate_env(tmp_path, monkeypatch):
    """Run each test from a clean tmp directory with no FOLIO_* variables set."""
    for name in Settings.model_fields:
        monkeypatch.delenv(f"FOLIO_{name.upper()}", raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture(name="content_dir")
def content_dir_fixture(tmp_path):
    """Local content tree with site.json, profile.json, and a few posts."""
    root = tmp_path / "content"
    blog = root / "blog"
    blog.mkdir(parents=True)
    (root / "site.json").write_text(json.dumps(SITE))
    (root / "profile.json").write_text(json.dumps(PROFILE))
    for name, text in POSTS.items():
        (blog / name).write_text(text)
    return root


@pytest.fixture(name="settings")
def settings_fixture(content_dir):
    return Settings(
        content_dir=str(content_dir),
        smtp_user="site@example.com",
        contact_to="owner@example.com",
    )


@pytest.fixture(name="fake_smtp")
def fake_smtp_fixture():
    return FakeSMTP()


@pytest.fixture(name="smtp_cls")
def smtp_cls_fixture():
    """FakeSMTP class, for tests that need a transport refusing some subjects."""
    return FakeSMTP
