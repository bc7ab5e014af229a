# models_bootstrap.py
from location import models as _location_models
from job import models as _job_models
from department import models as _department_models
from employee import models as _employee_models
