# config.py

class Config:
    # Page / UI
    page_title = "Page Replacement Visualizer"

    # Simulation defaults
    default_policy = "FIFO"
    default_frames = 3
    default_reference_string = "7,0,1,2,0,3,0,4,2,3,0,3,2"

    # Frame slider bounds for the front end (the engine accepts any count >= 1)
    min_frames = 1
    max_frames = 10

    # None means a fresh unseeded generator per run
    random_seed = None

    # Event log lines shown in the UI, newest first
    event_log_limit = 20
