"""Crew verification package.

End-of-shift crew reconciliation for roofing crews: rebuild who was on the job
with the shift leader, let the leader correct hours, and queue shift
correction requests for approval. Organized by feature modules (attendance,
assignments, directory, requests, verification) with a thin Flask controller
layer over service/repository layers.
"""
