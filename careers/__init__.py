"""
Campus Careers
A campus recruiting platform matching students to jobs and internships.

Architecture:
- PostgreSQL: Structured data (users, profiles, skills, postings, applications)
- MongoDB: CV documents
- Matching: weighted skill coverage score per posting
"""

__version__ = "1.0.0"
