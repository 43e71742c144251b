import os
import uvicorn

if __name__ == "__main__":
    # Load settings and export the environment first,
    # so later imports (logger) pick up the configured paths
    from config import settings
    settings.setup_environment()

    os.makedirs(settings.USER_DATA_DIR, exist_ok=True)

    from main import app

    port = int(os.environ.get("PORT", settings.PORT))

    print(f"Starting Setlist Studio Backend Server on port {port}...")
    print(f"User Data Directory: {settings.USER_DATA_DIR}")
    uvicorn.run(app, host="127.0.0.1", port=port, reload=False, workers=1)
