"""
MobiMap

Study-destination comparison backend: a weighted multi-criteria scoring
engine (mobimap.logic), the versioned application state (mobimap.state),
SQLAlchemy persistence (mobimap.repository) and the REST API
(mobimap.routes).
"""

__version__ = "1.0.0"
