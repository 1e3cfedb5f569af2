import argparse
import asyncio
import sys
import os

# Add project root to sys.path to allow imports from 'src'
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

async def run_headless(engine, duration: float):
    """Samples until interrupted (or for `duration` seconds) and prints each cycle."""
    async def print_cycle(eng):
        latest = eng.latest()
        if eng.last_failure:
            print(f"[WARNING] {eng.last_failure.kind}: {eng.last_failure.message}")
        elif latest:
            print(
                f"people={latest.people_count} vehicles={latest.vehicle_count} "
                f"density={latest.density.value} flow={latest.flow.value} risk={latest.risk_score}"
            )
        for alert in eng.alerts()[:1]:
            print(f"  latest alert: {alert.severity.value} {alert.type.value} - {alert.message}")

    engine.listener = print_cycle
    engine.start()
    try:
        if duration > 0:
            await asyncio.sleep(duration)
        else:
            await asyncio.Event().wait()
    finally:
        await engine.shutdown()

def main():
    """
    Main entry point for the zone monitor.
    """
    parser = argparse.ArgumentParser(description="Zone Monitor - Entry Point")
    parser.add_argument('mode', choices=['monitor', 'server'], help="Run headless or serve the API")
    parser.add_argument('--profile', default='default', help="Config profile under conf/monitoring")
    parser.add_argument('--duration', type=float, default=0.0, help="Seconds to run in monitor mode (0 = forever)")

    args, unknown = parser.parse_known_args()

    print(f"Starting mode: {args.mode}")

    from pathlib import Path
    from src.common.config import ConfigManager
    from src.monitoring.application.builder import MonitoringApplicationBuilder

    # Load configuration, merged with CLI dotlist overrides
    cfg = ConfigManager(Path("conf")).load_monitoring_config(args.profile, overrides=unknown)

    builder = MonitoringApplicationBuilder(cfg)

    if args.mode == 'monitor':
        engine = builder.build_engine()
        print(f"Sampling every {cfg.sampling.interval_seconds:.1f}s. Press Ctrl+C to exit.")
        try:
            asyncio.run(run_headless(engine, args.duration))
        except KeyboardInterrupt:
            print("\nStopping monitor...")
    elif args.mode == 'server':
        import uvicorn
        from src.monitoring.presentation.api import app, configure

        engine = builder.build_broadcaster().build_engine()
        configure(engine, builder.broadcaster)

        @app.on_event("shutdown")
        async def shutdown_event():
            await engine.shutdown()

        uvicorn.run(app, host=cfg.server.host, port=cfg.server.port)

if __name__ == "__main__":
    main()
