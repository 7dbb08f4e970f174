# Importe tous les modèles pour enregistrer leurs tables dans Base.metadata
# avant que SQLAlchemy tente de résoudre la clé étrangère login_history.student_id.

from app.models.student import Student  # noqa: F401  doit précéder login_history
from app.models.login_history import LoginHistory  # noqa: F401
