# This file marks the schemas package for API request and response models.
# Record schemas mirror the stored rows; listing schemas mirror the public map shape.
