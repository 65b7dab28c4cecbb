"""
Service layer: applicant backends, the per-session waitlist snapshot, the bulk
stage action and CSV export
"""
