"""Vehicle Tracker - backend REST et simulateur GPS / REST backend and GPS simulator."""
