# Design tokens for the Estuda Concursos UI

COLORS = {
    'background': '#FDFCFB',
    'surface': '#FFFFFF',
    'primary': '#008080',
    'primary_hover': '#006666',
    'primary_soft': '#E6F4F4',
    'text': '#111718',
    'text_muted': '#618389',
    'border': '#E5E7EB',
    'timer_bg': '#FDFBF7',
    'button_secondary_bg': '#F5F2ED',
    'sidebar_bg': '#FFFFFF',
    'sidebar_active_bg': '#E6F4F4',
    'footer_bg': '#E6F4F4',
    'footer_text': '#023840',
    'danger': '#EF4444',
}

FONTS = {
    'family': 'Inter, Manrope, Arial, sans-serif',
    'timer_size': 72,
    'timer_weight': 'bold',
    'button_size': 16,
    'text': 14,
    'text_strong': 22,
}

def stylesheet():
    """Application-wide QSS built from the tokens above."""
    return f"""
    QMainWindow, QWidget#Page {{ background: {COLORS['background']}; color: {COLORS['text']};
        font-family: {FONTS['family']}; font-size: {FONTS['text']}px; }}
    QListWidget#Sidebar {{ background: {COLORS['sidebar_bg']}; border: none;
        border-right: 1px solid {COLORS['border']}; padding-top: 24px; }}
    QListWidget#Sidebar::item {{ padding: 12px 0 12px 24px; color: {COLORS['text_muted']}; }}
    QListWidget#Sidebar::item:selected {{ background: {COLORS['sidebar_active_bg']}; color: {COLORS['primary']};
        font-weight: bold; }}
    QLabel#TimerLabel {{ font-size: {FONTS['timer_size']}px; font-weight: {FONTS['timer_weight']}; }}
    QLabel#Headline {{ font-size: {FONTS['text_strong']}px; font-weight: bold; }}
    QLabel#Muted {{ color: {COLORS['text_muted']}; }}
    QPushButton {{ font-size: {FONTS['button_size']}px; border-radius: 12px; padding: 10px 18px;
        background: {COLORS['button_secondary_bg']}; border: 1px solid {COLORS['border']}; }}
    QPushButton#PrimaryBtn {{ background: {COLORS['primary']}; color: white; border: none; font-weight: bold; }}
    QPushButton#PrimaryBtn:hover {{ background: {COLORS['primary_hover']}; }}
    QPushButton#PrimaryBtn:disabled {{ background: {COLORS['border']}; color: {COLORS['text_muted']}; }}
    QProgressBar {{ border: none; background: {COLORS['border']}; height: 6px; border-radius: 3px; }}
    QProgressBar::chunk {{ background: {COLORS['primary']}; border-radius: 3px; }}
    """
