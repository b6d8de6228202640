"""
Nexus — An Employee Engagement Workspace
=========================================
Courses with tracked progress, a team idea board with votes and comments,
badges and xp for finishing things, and a keyword-driven assistant that
answers common HR and IT questions.

Package layout::

    nexus/
    ├── config.py          # YAML → typed Python config
    ├── constants.py       # Account defaults, award keys, view titles
    ├── exceptions.py      # AppException taxonomy → HTTP status
    ├── security.py        # bcrypt hashing + JWT issue/decode
    ├── client.py          # httpx client holding an explicit session
    ├── database/
    │   ├── engine.py      # SQLAlchemy engine + async helper
    │   ├── membership.py  # insert_if_absent / remove_if_present
    │   └── models.py      # All ORM models (8 tables)
    ├── engine/
    │   └── chat.py        # Ordered keyword intent rules
    ├── services/
    │   ├── account_service.py     # Register, login, profile, dashboard
    │   ├── course_service.py      # Catalog, enrollment, completion awards
    │   ├── idea_service.py        # Idea board, vote toggle, comments
    │   ├── achievement_service.py # Badge listing + keyed grants
    │   ├── chat_service.py        # Assistant replies + chat log
    │   └── seed.py                # Demo workspace reset
    ├── web/
    │   ├── state.py       # ViewState (active view, token, user)
    │   ├── render.py      # Jinja2 HTML fragments
    │   └── templates/
    └── api/
        ├── main.py        # FastAPI app + error translation
        ├── auth.py        # Register / login → JWT
        ├── deps.py        # Engine, config, bearer-token guard
        └── routes/        # JSON + HTML fragment endpoints
"""

__version__ = "0.1.0"
