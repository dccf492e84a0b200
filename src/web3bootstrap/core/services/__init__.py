"""
Bootstrap services — detection, conditions, installers, profile, summary.

Detection and condition evaluation READ system state.  Installers and
the profile writer WRITE it, always through the run's process runner.
"""
