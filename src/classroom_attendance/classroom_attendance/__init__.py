"""Classroom attendance client.

Organized by feature modules (payload, attendance, outbox, reports, ...) with a
thin Flask controller layer over service/repository layers. The remote server
is reached through HTTP repositories; the device keeps a local outbox.
"""
