"""
CCR Adjudication - Tax-appeal committee judgment core

Administers municipal tax-appeal cases through committee review:
agenda scheduling, rapporteur/reviewer distribution, vote recording
with composed vote text, collective decisions (acórdãos) with
append-only publication history, and notification tracking.

Core rules:
- One transition function per aggregate writes its status
- Validation happens before any write
- Sequence numbers are allocated atomically per year
- A vote's role is derived from the distribution, never stored
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
