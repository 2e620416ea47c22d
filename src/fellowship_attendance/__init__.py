"""Fellowship attendance package.

Organized by feature modules (members, sessions, attendance, reports) with a thin
Flask controller layer over service/repository layers. Every repository has a
MySQL implementation and an in-memory fallback with the same behaviour.
"""
