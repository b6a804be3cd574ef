from sqlalchemy import Column, Integer, String, Text, JSON, DateTime, func

from ..database import Base


class Page(Base):
    """Contenido editable de una página del sitio (hero, servicios, FAQ, contacto)."""
    __tablename__ = "pages"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), nullable=False)
    slug = Column(String(255), unique=True, index=True, nullable=False)
    body = Column(Text, nullable=True)

    # Hero
    hero_title = Column(String(255), nullable=True)
    hero_video_url = Column(String(1000), nullable=True)
    hero_image_url = Column(String(1000), nullable=True)
    hero_video_source_type = Column(String(20), nullable=True)  # "upload" | "url"
    hero_image_source_type = Column(String(20), nullable=True)

    # Home
    homepage_about_section_text = Column(Text, nullable=True)
    homepage_services_section_text = Column(Text, nullable=True)
    main_intro_body = Column(Text, nullable=True)
    homepage_bottom_image_1_url = Column(String(1000), nullable=True)
    homepage_bottom_image_2_url = Column(String(1000), nullable=True)
    homepage_bottom_image_3_url = Column(String(1000), nullable=True)

    # Visión / misión / excelencia
    vision_title = Column(String(255), nullable=True)
    vision_body = Column(Text, nullable=True)
    mission_title = Column(String(255), nullable=True)
    mission_body = Column(Text, nullable=True)
    excellence_title = Column(String(255), nullable=True)
    excellence_image_1_url = Column(String(1000), nullable=True)
    excellence_image_2_url = Column(String(1000), nullable=True)
    excellence_image_3_url = Column(String(1000), nullable=True)

    # Galería
    gallery_intro_body = Column(Text, nullable=True)
    images = Column(JSON, nullable=True)  # lista de URLs

    # Contacto
    contact_overlay_text = Column(Text, nullable=True)
    contact_title = Column(String(255), nullable=True)
    contact_phone = Column(String(50), nullable=True)
    contact_location_title = Column(String(255), nullable=True)
    contact_location_body = Column(Text, nullable=True)
    contact_email_title = Column(String(255), nullable=True)
    contact_email_address = Column(String(255), nullable=True)
    contact_whatsapp_number = Column(String(50), nullable=True)

    # Servicios
    service_1_title = Column(String(255), nullable=True)
    service_1_body = Column(Text, nullable=True)
    service_1_image_url = Column(String(1000), nullable=True)
    service_2_title = Column(String(255), nullable=True)
    service_2_body = Column(Text, nullable=True)
    service_2_image_url = Column(String(1000), nullable=True)
    service_3_title = Column(String(255), nullable=True)
    service_3_body = Column(Text, nullable=True)
    service_3_image_url = Column(String(1000), nullable=True)

    # FAQ
    faq_main_title = Column(String(255), nullable=True)
    faq_1_question = Column(Text, nullable=True)
    faq_1_answer = Column(Text, nullable=True)
    faq_2_question = Column(Text, nullable=True)
    faq_2_answer = Column(Text, nullable=True)
    faq_3_question = Column(Text, nullable=True)
    faq_3_answer = Column(Text, nullable=True)
    faq_4_question = Column(Text, nullable=True)
    faq_4_answer = Column(Text, nullable=True)
    faq_5_question = Column(Text, nullable=True)
    faq_5_answer = Column(Text, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )
