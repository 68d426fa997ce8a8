from __future__ import annotations

from repairdesk.domain.entities.checklist import ChecklistItem, DeviceCategory

ANDROID_ITEMS: tuple[ChecklistItem, ...] = (
    ChecklistItem("screen", "Tela / Display"),
    ChecklistItem("touch", "Touch Screen"),
    ChecklistItem("speaker", "Alto-falante"),
    ChecklistItem("earpiece", "Auricular"),
    ChecklistItem("microphone", "Microfone"),
    ChecklistItem("camera_front", "Câmera Frontal"),
    ChecklistItem("camera_back", "Câmera Traseira"),
    ChecklistItem("wifi", "Wi-Fi"),
    ChecklistItem("bluetooth", "Bluetooth"),
    ChecklistItem("mobile_data", "Dados Móveis"),
    ChecklistItem("charging", "Carregamento"),
    ChecklistItem("battery", "Bateria"),
    ChecklistItem("fingerprint", "Biometria / Digital"),
    ChecklistItem("buttons_volume", "Botões de Volume"),
    ChecklistItem("button_power", "Botão Power"),
    ChecklistItem("sim_tray", "Bandeja do Chip"),
    ChecklistItem("sim_card", "Leitura do Chip"),
    ChecklistItem("vibration", "Vibração"),
    ChecklistItem("proximity_sensor", "Sensor de Proximidade"),
    ChecklistItem("gyroscope", "Giroscópio"),
    ChecklistItem("gps", "GPS"),
    ChecklistItem("nfc", "NFC"),
    ChecklistItem("flash", "Flash"),
    ChecklistItem("sd_card", "Slot SD Card"),
)

IOS_ITEMS: tuple[ChecklistItem, ...] = (
    ChecklistItem("screen", "Tela / Display"),
    ChecklistItem("touch", "Touch Screen"),
    ChecklistItem("3d_touch", "3D Touch / Haptic Touch"),
    ChecklistItem("face_id", "Face ID"),
    ChecklistItem("touch_id", "Touch ID"),
    ChecklistItem("speaker", "Alto-falante"),
    ChecklistItem("earpiece", "Auricular"),
    ChecklistItem("microphone", "Microfone"),
    ChecklistItem("camera_front", "Câmera Frontal (TrueDepth)"),
    ChecklistItem("camera_back", "Câmera Traseira"),
    ChecklistItem("camera_ultrawide", "Câmera Ultra Angular"),
    ChecklistItem("lidar", "Scanner LiDAR"),
    ChecklistItem("wifi", "Wi-Fi"),
    ChecklistItem("bluetooth", "Bluetooth"),
    ChecklistItem("mobile_data", "Dados Móveis"),
    ChecklistItem("charging", "Carregamento Lightning/USB-C"),
    ChecklistItem("wireless_charging", "Carregamento Sem Fio"),
    ChecklistItem("battery", "Bateria"),
    ChecklistItem("buttons_volume", "Botões de Volume"),
    ChecklistItem("button_power", "Botão Lateral"),
    ChecklistItem("silent_switch", "Chave Silencioso"),
    ChecklistItem("sim_tray", "Bandeja do Chip"),
    ChecklistItem("sim_card", "Leitura do Chip / eSIM"),
    ChecklistItem("vibration", "Taptic Engine"),
    ChecklistItem("proximity_sensor", "Sensor de Proximidade"),
    ChecklistItem("gyroscope", "Giroscópio"),
    ChecklistItem("gps", "GPS"),
    ChecklistItem("nfc", "NFC / Apple Pay"),
    ChecklistItem("flash", "Flash True Tone"),
    ChecklistItem("truetone_display", "True Tone Display"),
)

CHECKLIST_CATALOG: dict[DeviceCategory, tuple[ChecklistItem, ...]] = {
    DeviceCategory.android: ANDROID_ITEMS,
    DeviceCategory.ios: IOS_ITEMS,
}
