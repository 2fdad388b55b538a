import uvicorn
from app.main import app  # Import the FastAPI app

# Local dev server
if __name__ == "__main__":
    uvicorn.run("app.main:app", host="0.0.0.0", port=8000, reload=True)
