from mangum import Mangum
from main import app

# Serverless entrypoint (AWS Lambda / API Gateway, or any runtime that expects
# a Lambda-style ``handler(event, context)``).
handler = Mangum(app)
