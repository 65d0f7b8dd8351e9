"""
Package marker for the HydroVac directory service.
The API lives in `src.api`, directory domain logic in `src.directory`, and process settings in `src.common`.
"""
