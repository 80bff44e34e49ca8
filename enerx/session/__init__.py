"""
Session/view state machine for the dashboard.

Modules
-------
transitions : Pure intent functions (login, logout, select_tab) and the
              guarded generator completions. No I/O, no asyncio.
controller  : DashboardController — owns the state, runs generation tasks,
              notifies observers.
"""
