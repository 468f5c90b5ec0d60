from app.main import app
from mangum import Mangum

# ASGI handler for serverless deployment (Vercel, AWS Lambda)
handler = Mangum(app, lifespan="off")
