import os
import sys
import hydra
import uvicorn
from omegaconf import DictConfig

# Add src to path
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from src.common.config import ConfigManager
from src.monitoring.application.builder import MonitoringApplicationBuilder
from src.monitoring.presentation.api import app, configure

@hydra.main(version_base=None, config_path="../conf", config_name="config")
def main(cfg: DictConfig):
    print("Configuration loaded.")

    monitoring_cfg = ConfigManager.from_container(cfg.monitoring)

    builder = MonitoringApplicationBuilder(monitoring_cfg)
    engine = (
        builder
        .build_capture()
        .build_analyzer()
        .build_reporter()
        .build_broadcaster()
        .build_zones()
        .build_engine()
    )
    configure(engine, builder.broadcaster)

    @app.on_event("shutdown")
    async def shutdown_event():
        print("Shutting down monitoring engine...")
        await engine.shutdown()

    server_cfg = monitoring_cfg.server
    print(f"Starting server at http://{server_cfg.host}:{server_cfg.port}")
    print("Engine is idle; POST /engine/start to begin sampling.")
    uvicorn.run(app, host=server_cfg.host, port=server_cfg.port)

if __name__ == "__main__":
    main()
