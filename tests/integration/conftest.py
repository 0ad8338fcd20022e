"""Shared fixtures for integration tests: a small posts directory on disk."""

import pytest
from loguru import logger

POSTS = {
    "2014-3-7-wordpress-rewrite-rules.md": """---
layout: post
title: WordPress rewrite rules
tags: [php, wordpress]
categories: [web]
---
Rules are registered with [add_rewrite_rule](https://developer.wordpress.org/reference/functions/add_rewrite_rule/).

```php
add_rewrite_rule('^books/([^/]*)/?', 'index.php?book=$matches[1]', 'top');
```
""",
    "2015-11-2-activerecord-scopes.md": """---
layout: post
title: ActiveRecord scopes
date: 2015-11-02 09:30:00 +0100
tags: [ruby, rails]
categories: [ruby]
---
A scope is a class method in disguise:

```
scope :published, -> { where(published: true) }
```
""",
    "2016-1-5-broken-sql.md": """---
layout: post
title: Counting rows fast
tags: [sql]
categories: [databases]
---
Intro

```sql
SELECT reltuples FROM pg_class WHERE relname = 'posts';
""",
    "2016-2-1-bad-yaml.md": """---
layout: post
title: Rails: the good parts
---
Body
""",
}


@pytest.fixture
def posts_dir(tmp_path):
    """Four posts: one clean, one with a warning, two with errors, plus files that are not posts."""
    directory = tmp_path / "_posts"
    directory.mkdir()
    for name, text in POSTS.items():
        (directory / name).write_text(text, encoding="utf-8")

    (directory / "notes.txt").write_text("not a post", encoding="utf-8")
    (directory / ".2016-3-1-hidden.md").write_text("---\ntitle: hidden\n---\n", encoding="utf-8")
    (directory / ".drafts").mkdir()
    (directory / ".drafts" / "2016-3-2-draft.md").write_text("no front matter", encoding="utf-8")
    return directory


@pytest.fixture
def clean_posts_dir(tmp_path):
    """A posts directory where every post is clean."""
    directory = tmp_path / "clean" / "_posts"
    directory.mkdir(parents=True)
    name = "2014-3-7-wordpress-rewrite-rules.md"
    (directory / name).write_text(POSTS[name], encoding="utf-8")
    return directory


@pytest.fixture(autouse=True)
def reset_logger():
    """Drop sinks added during a test so they do not outlive captured streams."""
    yield
    logger.remove()
