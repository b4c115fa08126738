#!/usr/bin/env python3
"""
adsreport API Startup Script

This script loads a local .env file and starts the adsreport FastAPI server.
"""

import sys

import uvicorn

from adsreport.utils.env import load_env_file


def main():
    """Start the adsreport API server."""
    print("🚀 Starting adsreport API Server...")
    print("📊 Features:")
    print("   ✅ Google Ads connection test")
    print("   ✅ Campaign / account metrics as CSV")
    print("   ✅ Metrics pushed to Google Sheets")
    print("")
    print("📖 Documentation will be available at:")
    print("   🌐 Swagger UI:  http://localhost:8000/docs")
    print("   📚 ReDoc:       http://localhost:8000/redoc")
    print("")

    load_env_file()

    try:
        uvicorn.run(
            "adsreport.main:app",
            host="0.0.0.0",
            port=8000,
            reload=True,
            reload_dirs=["adsreport"],
            log_level="info"
        )
    except KeyboardInterrupt:
        print("\n👋 Shutting down adsreport API server...")
    except Exception as e:
        print(f"❌ Error starting server: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
