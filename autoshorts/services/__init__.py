"""
Services package - Core business logic and integrations

Organized by domain responsibility:

Pipeline (Core Video Generation Flow):
    - pipeline/script_generation: Category prompt to validated scenes
    - pipeline/audio: Voice-over synthesis
    - pipeline/video: Per-scene clip rendering
    - pipeline/generation_pipeline.py: Stage sequencing for one job

Scheduling:
    - scheduler/catch_up.py: Daily slot catch-up decisions
    - scheduler/runner.py: Recurring evaluation and dispatch
    - scheduler/trigger.py: Cron-triggered server-side generation

Infrastructure (Technical Concerns):
    - infrastructure/keys: API key pool and rotating executor
    - infrastructure/llm: Gemini gateway
    - infrastructure/storage: Artifacts and studio state
    - infrastructure/orchestration: Job ledger and recurring tasks
    - infrastructure/parsing: JSON recovery from model output

Wiring:
    - registry.py: Shared instances for the API
    - lifecycle.py: Start-up checks and the automation loop
"""
