from datetime import date, time
from html import escape

_WEEKDAYS = ("lunes", "martes", "miércoles", "jueves", "viernes", "sábado", "domingo")
_MONTHS = (
    "enero", "febrero", "marzo", "abril", "mayo", "junio",
    "julio", "agosto", "septiembre", "octubre", "noviembre", "diciembre",
)


def format_long_date(d: date) -> str:
    """e.g. 'sábado, 1 de junio de 2024'"""
    return f"{_WEEKDAYS[d.weekday()]}, {d.day} de {_MONTHS[d.month - 1]} de {d.year}"


def format_time(t: time) -> str:
    return t.strftime("%H:%M")


def _full_name(nombre: str, apellidos: str) -> str:
    return escape(f"{nombre} {apellidos}".strip())


def request_received_email(*, nombre: str, apellidos: str, fecha: date, hora: time) -> tuple[str, str]:
    subject = "Solicitud de Entrevista Recibida"
    html = f"""
      <h2>Solicitud de Entrevista Recibida</h2>
      <p>Estimado/a {_full_name(nombre, apellidos)},</p>
      <p>Hemos recibido tu solicitud de entrevista para:</p>
      <ul>
        <li><strong>Fecha:</strong> {fecha.isoformat()}</li>
        <li><strong>Hora:</strong> {format_time(hora)}</li>
      </ul>
      <p>En breve recibirás una confirmación con los detalles finales de tu entrevista.</p>
      <p>Saludos cordiales,<br>Equipo de Reclutamiento</p>
    """
    return subject, html


def interview_confirmed_email(*, nombre: str, apellidos: str, fecha: date, hora: time) -> tuple[str, str]:
    subject = "✅ Confirmación de Entrevista"
    html = f"""
      <h2 style="color: #667eea;">¡Tu Entrevista ha sido Confirmada!</h2>
      <p>Estimado/a {_full_name(nombre, apellidos)},</p>
      <p>Nos complace confirmar tu entrevista con los siguientes detalles:</p>
      <div style="background: #f8f9fa; padding: 20px; border-radius: 10px; margin: 20px 0;">
        <p style="margin: 10px 0;"><strong>📅 Fecha:</strong> {format_long_date(fecha)}</p>
        <p style="margin: 10px 0;"><strong>🕐 Hora:</strong> {format_time(hora)}</p>
      </div>
      <p><strong>Recomendaciones:</strong></p>
      <ul>
        <li>Por favor llega 10 minutos antes</li>
        <li>Trae una copia de tu CV</li>
        <li>Prepara preguntas sobre la posición</li>
      </ul>
      <p>¡Te deseamos mucho éxito en tu entrevista!</p>
      <p>Saludos cordiales,<br><strong>Equipo de Reclutamiento</strong></p>
    """
    return subject, html
