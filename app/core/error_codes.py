"""Machine readable error codes returned alongside error details."""

# Posts
POST_NOT_FOUND = "POST_NOT_FOUND"
POST_CREATION_ERROR = "POST_CREATION_ERROR"
POST_UPDATE_PERMISSION_DENIED = "POST_UPDATE_PERMISSION_DENIED"
POST_DELETE_PERMISSION_DENIED = "POST_DELETE_PERMISSION_DENIED"
POST_UPDATE_ERROR = "POST_UPDATE_ERROR"
POST_DELETE_ERROR = "POST_DELETE_ERROR"
POSTS_FETCH_ERROR = "POSTS_FETCH_ERROR"

# Answers
ANSWER_CREATION_ERROR = "ANSWER_CREATION_ERROR"

# Interactions
INTERACTION_FAILED = "INTERACTION_FAILED"
INTERACTIONS_FETCH_ERROR = "INTERACTIONS_FETCH_ERROR"

# Profiles
PROFILE_FETCH_ERROR = "PROFILE_FETCH_ERROR"
PROFILE_UPDATE_ERROR = "PROFILE_UPDATE_ERROR"

# Uploads
INVALID_FILE_TYPE = "INVALID_FILE_TYPE"
FILE_TOO_LARGE = "FILE_TOO_LARGE"
FILE_UPLOAD_ERROR = "FILE_UPLOAD_ERROR"

# Reports & contact
REPORT_SUBMISSION_ERROR = "REPORT_SUBMISSION_ERROR"
EMAIL_DELIVERY_ERROR = "EMAIL_DELIVERY_ERROR"
