"""
Recommendation engine: a fixed candidate pool behind an async generator
contract that the dashboard controller drives.

Modules
-------
candidates : candidate_pool() + sort_by_priority() + summarize_priorities()
             — pure functions, no I/O.
generator  : RecommendationGenerator ABC + ScriptedRecommendationGenerator
             (simulated latency, cancellable).
"""
